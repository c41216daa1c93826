# propguard/adapters/repos/properties.py
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import settings
from ...domain.address import AddressKey, canonical_identity
from ...domain.errors import StoreError
from ...models import Property, PropertyStatus, new_id, utcnow
from .base import insert_if_absent

log = logging.getLogger(__name__)

_IDENTITY_COLUMNS = ["address", "city", "state", "country"]


class PropertyRepository:
    """
    PropertyIdentityResolver: one canonical Property per identity key.

    Blank keys are the caller's problem; validate before calling resolve().
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def identity(self, address: str, city: str, state: str, country: str | None = None) -> AddressKey:
        return canonical_identity(address, city, state, country, default_country=settings.DEFAULT_COUNTRY)

    async def get(self, property_id: str) -> Property | None:
        return await self.session.get(Property, property_id)

    async def get_many(self, property_ids: list[str]) -> dict[str, Property]:
        if not property_ids:
            return {}
        q = select(Property).where(Property.id.in_(property_ids))
        rows = (await self.session.execute(q)).scalars().all()
        return {p.id: p for p in rows}

    async def find(self, key: AddressKey) -> Property | None:
        q = select(Property).where(
            Property.address == key.address,
            Property.city == key.city,
            Property.state == key.state,
            Property.country == key.country,
        )
        return (await self.session.execute(q)).scalars().first()

    async def resolve(
        self,
        address: str,
        city: str,
        state: str,
        country: str | None = None,
        *,
        zip_code: str | None = None,
    ) -> Property:
        """
        Return the Property for this identity, creating it on a miss.

        A hit is returned unchanged. Creation is a single conditional insert
        against uq_property_identity, so two concurrent first-time resolutions
        converge on one row: the loser's insert is a no-op and the re-read
        returns the winner's record.
        """
        key = self.identity(address, city, state, country)

        existing = await self.find(key)
        if existing is not None:
            return existing

        now = utcnow()
        candidate_id = new_id()
        stmt = insert_if_absent(
            self.session,
            Property,
            values=dict(
                id=candidate_id,
                address=key.address,
                city=key.city,
                state=key.state,
                country=key.country,
                zip_code=(zip_code or "").strip(),
                status=PropertyStatus.active,
                last_checked=now,
                total_flags=0,
                verified_scam=False,
                first_flagged=None,
            ),
            index_elements=_IDENTITY_COLUMNS,
        )
        await self.session.execute(stmt)

        prop = await self.find(key)
        if prop is None:
            # the conflicting row must be visible to this transaction
            raise StoreError(f"property not visible after conditional insert: {key}")

        if prop.id == candidate_id:
            log.info("created property id=%s key=%s", prop.id, key)
        else:
            log.info("identity race lost, reusing property id=%s key=%s", prop.id, key)
        return prop

    async def touch(self, prop: Property) -> Property:
        prop.last_checked = utcnow()
        await self.session.flush()
        return prop

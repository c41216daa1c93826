# propguard/adapters/repos/watches.py
from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ...domain.errors import StoreError
from ...models import DEFAULT_WATCH_ALERT_TYPES, Property, PropertyWatch, utcnow
from .base import insert_if_absent
from .properties import PropertyRepository


class WatchRepository:
    """WatchlistManager: at most one PropertyWatch per (user_id, property_id)."""

    def __init__(self, session: AsyncSession, properties: PropertyRepository | None = None):
        self.session = session
        self.properties = properties or PropertyRepository(session)

    async def watch(
        self,
        user_id: str,
        property_id: str,
        notifications_enabled: bool | None = True,
    ) -> PropertyWatch:
        """
        Upsert. Re-watching updates notifications_enabled and last_checked
        instead of adding a second row; added_at and alert_types keep their
        first-write values.
        """
        enabled = notifications_enabled is not False
        now = utcnow()

        await self.session.execute(
            insert_if_absent(
                self.session,
                PropertyWatch,
                values=dict(
                    user_id=user_id,
                    property_id=property_id,
                    added_at=now,
                    last_checked=now,
                    notifications_enabled=enabled,
                    alert_types=list(DEFAULT_WATCH_ALERT_TYPES),
                ),
                index_elements=["user_id", "property_id"],
            )
        )
        await self.session.execute(
            update(PropertyWatch)
            .where(PropertyWatch.user_id == user_id, PropertyWatch.property_id == property_id)
            .values(notifications_enabled=enabled, last_checked=now)
            .execution_options(synchronize_session=False)
        )

        watch = await self.session.get(PropertyWatch, (user_id, property_id), populate_existing=True)
        if watch is None:
            raise StoreError(f"watch not visible after upsert: {user_id}/{property_id}")
        return watch

    async def unwatch(self, user_id: str, property_id: str) -> bool:
        res = await self.session.execute(
            delete(PropertyWatch)
            .where(PropertyWatch.user_id == user_id, PropertyWatch.property_id == property_id)
            .execution_options(synchronize_session=False)
        )
        return res.rowcount > 0

    async def watches_for(self, user_id: str) -> list[PropertyWatch]:
        q = (
            select(PropertyWatch)
            .where(PropertyWatch.user_id == user_id)
            .order_by(PropertyWatch.added_at.asc())
        )
        return list((await self.session.execute(q)).scalars().all())

    async def properties_for(self, watches: list[PropertyWatch]) -> list[Property]:
        # a watch whose property is gone is dropped, not an error
        by_id = await self.properties.get_many([w.property_id for w in watches])
        return [by_id[w.property_id] for w in watches if w.property_id in by_id]

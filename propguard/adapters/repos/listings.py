# propguard/adapters/repos/listings.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...domain.history import ListingHistorySummary, summarize_listings
from ...models import Listing


class ListingRepository:
    """
    ListingLedger: read side of per-platform listing observations.
    Listings are written by the ingestion path (services/ingest.py), never here.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def listings_for(self, property_id: str) -> list[Listing]:
        q = select(Listing).where(Listing.property_id == property_id)
        return list((await self.session.execute(q)).scalars().all())

    async def summarize(self, property_id: str) -> ListingHistorySummary:
        # recomputed on every call; no caching layer
        return summarize_listings(property_id, await self.listings_for(property_id))

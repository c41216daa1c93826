# tests/test_ingest.py
from datetime import datetime

import pytest

from propguard.adapters.sqlalchemy_repos import SqlAlchemyRepos
from propguard.services.ingest import record_listing


@pytest.mark.asyncio
async def test_record_listing_accepts_scraper_keys(async_session_maker, seeded_property):
    async with async_session_maker() as session:
        l = await record_listing(
            session,
            seeded_property.id,
            {
                "platform": "Zillow",
                "listPrice": "325000",
                "sellerPhone": " 555-0100 ",
                "sellerEmail": "",
                "listedDate": "2024-05-01T12:00:00Z",
            },
        )
        await session.commit()

    assert l.platform == "zillow"
    assert l.price == 325000.0
    assert l.seller_phone == "555-0100"
    assert l.seller_email is None
    assert l.observed_at == datetime(2024, 5, 1, 12, 0, 0)


@pytest.mark.asyncio
async def test_record_listing_unknown_price_and_platform(async_session_maker, seeded_property):
    async with async_session_maker() as session:
        a = await record_listing(session, seeded_property.id, {"price": -5})
        b = await record_listing(session, seeded_property.id, {})
        await session.commit()

    assert a.price == 0.0 and b.price == 0.0
    assert a.platform == "other"

    async with async_session_maker() as session:
        summary = await SqlAlchemyRepos(session).listings.summarize(seeded_property.id)
    assert summary.total_listings == 2
    assert summary.avg_price == 0

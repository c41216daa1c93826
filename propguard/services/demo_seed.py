# propguard/services/demo_seed.py
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..adapters.sqlalchemy_repos import SqlAlchemyRepos
from ..models import ReporterType
from .ingest import record_listing

log = logging.getLogger(__name__)

SYSTEM_USER = "system"

DEMO_PROPERTIES: list[dict[str, Any]] = [
    {
        "address": "123 Scam Street",
        "city": "Miami",
        "state": "FL",
        "zipCode": "33101",
        "verifiedScam": True,
        "listings": [
            {"platform": "craigslist", "price": 250000, "sellerPhone": "305-555-0100"},
            {"platform": "facebook", "price": 150000, "sellerEmail": "owner.abroad@example.com"},
            {"platform": "zillow", "price": 180000, "sellerName": "J. Smith"},
        ],
        "reports": [
            ("wire_fraud", "Seller demanded a wire transfer before any viewing."),
            ("fake_listing", "Photos copied from a listing in another state."),
        ],
    },
    {
        "address": "456 Fake Ave",
        "city": "Los Angeles",
        "state": "CA",
        "zipCode": "90001",
        "listings": [
            {"platform": "facebook", "price": 450000, "sellerPhone": "213-555-0199"},
            {"platform": "rightmove", "price": 320000, "sellerPhone": "213-555-0199"},
        ],
        "reports": [
            ("price_manipulation", "Price dropped by a third within a week on a second site."),
        ],
    },
    {
        "address": "789 Fraud Lane",
        "city": "New York",
        "state": "NY",
        "zipCode": "10001",
        "listings": [
            {"platform": "craigslist", "price": 650000},
            {"platform": "zillow", "price": 400000, "sellerEmail": "nyc.deals@example.com"},
            {"platform": "realtor", "price": 500000, "sellerName": "Metro Homes"},
        ],
        "reports": [
            ("seller_fraud", "Seller is not the owner on record."),
        ],
    },
    {
        "address": "321 Rental Scam Rd",
        "city": "Chicago",
        "state": "IL",
        "zipCode": "60601",
        "verifiedScam": True,
        "listings": [
            {"platform": "craigslist", "price": 1800, "sellerPhone": "312-555-0142"},
            {"platform": "facebook", "price": 1200, "sellerPhone": "312-555-0143"},
        ],
        "reports": [
            ("rental_scam", "Asked for first and last month's rent via gift cards."),
        ],
    },
    {
        "address": "555 Legit Street",
        "city": "Austin",
        "state": "TX",
        "zipCode": "73301",
        "listings": [
            {"platform": "zillow", "price": 380000, "sellerName": "Austin Realty"},
        ],
        "reports": [],
    },
]


async def seed_demo(session: AsyncSession) -> dict[str, int]:
    """
    Load the demo properties with their listings, reports and alerts.

    Safe to run repeatedly: a property that already has listings is left alone.
    Does NOT commit (caller controls transaction boundaries).
    """
    repos = SqlAlchemyRepos(session)
    seeded = 0
    skipped = 0

    for demo in DEMO_PROPERTIES:
        prop = await repos.properties.resolve(
            demo["address"], demo["city"], demo["state"], zip_code=demo.get("zipCode")
        )
        if await repos.listings.listings_for(prop.id):
            skipped += 1
            continue

        for listing in demo["listings"]:
            await record_listing(session, prop.id, listing)

        for scam_type, description in demo["reports"]:
            await repos.reports.file(
                property_id=prop.id,
                reported_by=SYSTEM_USER,
                scam_type=scam_type,
                description=description,
                reporter_type=ReporterType.system,
            )

        if demo.get("verifiedScam"):
            # seed data stands in for the trusted escalation path
            prop.verified_scam = True
            await session.flush()

        seeded += 1

    log.info("demo seed: seeded=%d skipped=%d", seeded, skipped)
    return {"seeded": seeded, "skipped": skipped}

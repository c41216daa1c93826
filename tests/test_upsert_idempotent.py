# tests/test_upsert_idempotent.py
import asyncio

import pytest
from sqlalchemy import func, select

from propguard.adapters.repos.properties import PropertyRepository
from propguard.models import Property, PropertyStatus
from propguard.service_layer.use_cases.check import check_property


async def _count_properties(maker) -> int:
    async with maker() as session:
        return (await session.execute(select(func.count()).select_from(Property))).scalar_one()


@pytest.mark.asyncio
async def test_resolve_property_idempotent(async_session_maker):
    async with async_session_maker() as session:
        p1 = await PropertyRepository(session).resolve("123 Demo St", "Birmingham", "MI")
        await session.commit()

    async with async_session_maker() as session:
        p2 = await PropertyRepository(session).resolve("  123 DEMO st", "birmingham ", "mi")
        await session.commit()

    assert p1.id == p2.id
    assert await _count_properties(async_session_maker) == 1


@pytest.mark.asyncio
async def test_resolve_creates_with_defaults(async_session_maker):
    async with async_session_maker() as session:
        p = await PropertyRepository(session).resolve("1 New Rd", "Troy", "MI", zip_code="48084")
        await session.commit()

    assert p.status == PropertyStatus.active
    assert p.total_flags == 0
    assert p.verified_scam is False
    assert p.first_flagged is None
    assert p.last_checked is not None
    assert (p.address, p.city, p.state, p.country, p.zip_code) == ("1 NEW RD", "TROY", "MI", "US", "48084")


@pytest.mark.asyncio
async def test_resolve_hit_returns_existing_unchanged(async_session_maker, seeded_property):
    async with async_session_maker() as session:
        p = await PropertyRepository(session).resolve("123 Main St", "Birmingham", "MI")
        assert p.id == seeded_property.id
        assert p.zip_code == "48009"
        assert p.last_checked == seeded_property.last_checked


@pytest.mark.asyncio
async def test_touch_moves_last_checked_forward(async_session_maker, seeded_property):
    async with async_session_maker() as session:
        repo = PropertyRepository(session)
        p = await repo.get(seeded_property.id)
        before = p.last_checked
        await repo.touch(p)
        await session.commit()

    async with async_session_maker() as session:
        p = await PropertyRepository(session).get(seeded_property.id)
        assert p.last_checked >= before


@pytest.mark.asyncio
async def test_concurrent_first_resolutions_create_one_property(file_session_maker):
    n = 8

    async def _resolve_once() -> str:
        async with file_session_maker() as session:
            prop = await PropertyRepository(session).resolve("9 Race Ct", "Austin", "TX")
            await session.commit()
            return prop.id

    ids = await asyncio.gather(*[_resolve_once() for _ in range(n)])

    assert len(ids) == n
    assert len(set(ids)) == 1
    assert await _count_properties(file_session_maker) == 1


@pytest.mark.asyncio
async def test_concurrent_checks_share_one_property(file_session_maker):
    n = 6

    async def _check_once():
        async with file_session_maker() as session:
            return await check_property(
                session, user_id="u", address="77 Sunset Blvd", city="Austin", state="TX"
            )

    results = await asyncio.gather(*[_check_once() for _ in range(n)])

    assert all(r.ok for r in results)
    assert len({r.value.property.id for r in results}) == 1
    assert await _count_properties(file_session_maker) == 1

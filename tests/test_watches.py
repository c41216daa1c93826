# tests/test_watches.py
import pytest
from sqlalchemy import func, select

from propguard.adapters.repos.watches import WatchRepository
from propguard.domain.errors import StoreError
from propguard.models import DEFAULT_WATCH_ALERT_TYPES, PropertyWatch
from propguard.service_layer.use_cases.watch import list_watches, unwatch_property, watch_property


async def _watch(maker, property_id, enabled=None, user_id="user-1"):
    async with maker() as session:
        return await watch_property(
            session, user_id=user_id, property_id=property_id, notifications_enabled=enabled
        )


@pytest.mark.asyncio
async def test_watch_defaults(async_session_maker, seeded_property):
    res = await _watch(async_session_maker, seeded_property.id)
    assert res.ok
    w = res.value
    assert w.notifications_enabled is True
    assert w.alert_types == list(DEFAULT_WATCH_ALERT_TYPES)
    assert w.added_at is not None


@pytest.mark.asyncio
async def test_rewatch_updates_instead_of_duplicating(async_session_maker, seeded_property):
    first = await _watch(async_session_maker, seeded_property.id, enabled=True)
    second = await _watch(async_session_maker, seeded_property.id, enabled=False)
    assert first.ok and second.ok

    async with async_session_maker() as session:
        rows = (await session.execute(select(PropertyWatch))).scalars().all()

    assert len(rows) == 1
    assert rows[0].notifications_enabled is False
    assert rows[0].added_at == first.value.added_at
    assert rows[0].last_checked >= first.value.last_checked


@pytest.mark.asyncio
async def test_watch_unknown_property(async_session_maker):
    res = await _watch(async_session_maker, "missing")
    assert res.ok is False
    assert res.error.code == "NOT_FOUND"

    res = await _watch(async_session_maker, "")
    assert res.ok is False
    assert res.error.code == "MISSING_FIELD"


@pytest.mark.asyncio
async def test_list_watches_skips_missing_properties(async_session_maker, seeded_property):
    await _watch(async_session_maker, seeded_property.id)
    await _watch(async_session_maker, seeded_property.id, user_id="someone-else")

    async with async_session_maker() as session:
        # a dangling watch: not a normal flow, must not break listing
        session.add(PropertyWatch(user_id="user-1", property_id="deleted-property"))
        await session.commit()

    async with async_session_maker() as session:
        res = await list_watches(session, user_id="user-1")

    assert res.ok
    assert len(res.value.watches) == 2
    assert [p.id for p in res.value.properties] == [seeded_property.id]


@pytest.mark.asyncio
async def test_unwatch(async_session_maker, seeded_property):
    await _watch(async_session_maker, seeded_property.id)

    async with async_session_maker() as session:
        assert (await unwatch_property(session, user_id="user-1", property_id=seeded_property.id)).value is True
    async with async_session_maker() as session:
        assert (await unwatch_property(session, user_id="user-1", property_id=seeded_property.id)).value is False
        count = (await session.execute(select(func.count()).select_from(PropertyWatch))).scalar_one()
        assert count == 0


@pytest.mark.asyncio
async def test_watch_not_visible_after_upsert_is_store_error(async_session_maker, seeded_property, monkeypatch):
    async def _missing(*args, **kwargs):
        return None

    async with async_session_maker() as session:
        monkeypatch.setattr(session, "get", _missing)
        with pytest.raises(StoreError):
            await WatchRepository(session).watch("user-1", seeded_property.id)

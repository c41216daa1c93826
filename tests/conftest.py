# tests/conftest.py
import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from propguard.db import get_session
from propguard.entrypoints.fastapi_app import create_app
from propguard.models import Base, Property, PropertyStatus


@pytest.fixture
async def engine():
    """
    Fresh in-memory DB per test. StaticPool makes all connections share the same
    in-memory database for the lifetime of this engine fixture.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def async_session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=True)


@pytest.fixture
async def file_engine(tmp_path):
    """
    File-backed DB with a real connection pool, so concurrent sessions get
    their own connections and genuinely race on the database lock.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'race.db'}",
        connect_args={"timeout": 30},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def file_session_maker(file_engine):
    return async_sessionmaker(file_engine, expire_on_commit=False)


@pytest.fixture
async def seeded_property(async_session_maker):
    async with async_session_maker() as session:  # type: AsyncSession
        p = Property(
            address="123 MAIN ST",
            city="BIRMINGHAM",
            state="MI",
            country="US",
            zip_code="48009",
            status=PropertyStatus.active,
            total_flags=0,
            verified_scam=False,
        )
        session.add(p)
        await session.commit()
        await session.refresh(p)
        return p


@pytest.fixture
async def client(async_session_maker):
    app = create_app()

    async def _session_override():
        async with async_session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = _session_override

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"X-User-Id": "user-1"}

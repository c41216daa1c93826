from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import settings


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        # concurrent writers queue on the database lock instead of failing fast
        return {"timeout": settings.SQLITE_BUSY_TIMEOUT_S}
    return {}


engine: AsyncEngine = create_async_engine(
    settings.PROPGUARD_DB_URL,
    echo=False,
    connect_args=_connect_args(settings.PROPGUARD_DB_URL),
)

# Canonical async session factory
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency that yields a session.
    """
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def async_session() -> AsyncIterator[AsyncSession]:
    """
    Convenience context manager used in scripts and the demo seed.
    """
    async with AsyncSessionLocal() as session:
        yield session

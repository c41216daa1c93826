# propguard/service_layer/unit_of_work.py
from __future__ import annotations

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..adapters.sqlalchemy_repos import SqlAlchemyRepos
from ..db import AsyncSessionLocal


class UnitOfWork(Protocol):
    repos: SqlAlchemyRepos

    async def __aenter__(self) -> "UnitOfWork": ...
    async def __aexit__(self, exc_type, exc, tb) -> None: ...
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...


class SqlAlchemyUnitOfWork:
    """
    Wraps either a caller-owned session (FastAPI dependency, tests) or a fresh
    one from `session_factory`. Only sessions opened here are closed here.

    Leaving the block without commit() rolls back.
    """

    def __init__(
        self,
        session: AsyncSession | None = None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        self._external = session
        self._factory = session_factory or AsyncSessionLocal
        self.session: AsyncSession | None = None
        self.repos: SqlAlchemyRepos | None = None
        self._committed = False

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self.session = self._external if self._external is not None else self._factory()
        self.repos = SqlAlchemyRepos(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if exc is not None or not self._committed:
                await self.rollback()
        finally:
            if self.session is not None and self._external is None:
                await self.session.close()

    async def commit(self) -> None:
        assert self.session is not None
        await self.session.commit()
        self._committed = True

    async def rollback(self) -> None:
        assert self.session is not None
        await self.session.rollback()

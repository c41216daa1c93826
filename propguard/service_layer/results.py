# propguard/service_layer/results.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from ..adapters.sqlalchemy_repos import SqlAlchemyRepos
from ..domain.errors import EngineError, StoreError
from .unit_of_work import SqlAlchemyUnitOfWork

log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class UseCaseResult(Generic[T]):
    """Tagged outcome handed across the external boundary instead of raising."""

    ok: bool
    value: T | None = None
    error: EngineError | None = None

    @classmethod
    def success(cls, value: T) -> "UseCaseResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: EngineError) -> "UseCaseResult[T]":
        return cls(ok=False, error=error)


async def run_in_uow(
    name: str,
    uow: SqlAlchemyUnitOfWork,
    work: Callable[[SqlAlchemyRepos], Awaitable[T]],
) -> UseCaseResult[T]:
    """
    Run `work` in one transaction. Commit on success, roll back on any failure.

    Engine errors pass through with their own wording; store failures are
    logged and surfaced as StoreError. Nothing is retried.
    """
    async with uow:
        assert uow.repos is not None
        try:
            value = await work(uow.repos)
            await uow.commit()
        except EngineError as e:
            await uow.rollback()
            log.info("%s rejected: %s (%s)", name, e.message, e.code)
            return UseCaseResult.failure(e)
        except SQLAlchemyError as e:
            await uow.rollback()
            log.exception("%s failed in the store", name)
            err = StoreError(f"{name} failed")
            err.__cause__ = e
            return UseCaseResult.failure(err)
    return UseCaseResult.success(value)

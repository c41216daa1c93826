# propguard/service_layer/use_cases/watch.py
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from ...adapters.sqlalchemy_repos import SqlAlchemyRepos
from ...domain.address import is_blank
from ...domain.errors import NotFoundError, ValidationError
from ...integrations.outbox import enqueue_event
from ...models import Property, PropertyWatch
from ..results import UseCaseResult, run_in_uow
from ..unit_of_work import SqlAlchemyUnitOfWork


@dataclass
class Watchlist:
    watches: list[PropertyWatch]
    properties: list[Property]


async def watch_property(
    session: AsyncSession,
    *,
    user_id: str,
    property_id: str | None,
    notifications_enabled: bool | None = None,
) -> UseCaseResult[PropertyWatch]:
    async def _work(repos: SqlAlchemyRepos) -> PropertyWatch:
        if is_blank(property_id):
            raise ValidationError("property_id is required")
        if await repos.properties.get(property_id) is None:
            raise NotFoundError(f"property {property_id} not found")

        watch = await repos.watches.watch(user_id, property_id, notifications_enabled)
        await enqueue_event(
            repos.session,
            "property.watched",
            {
                "user_id": user_id,
                "property_id": property_id,
                "notifications_enabled": watch.notifications_enabled,
                "alert_types": list(watch.alert_types),
            },
        )
        return watch

    return await run_in_uow("watch_property", SqlAlchemyUnitOfWork(session), _work)


async def list_watches(session: AsyncSession, *, user_id: str) -> UseCaseResult[Watchlist]:
    async def _work(repos: SqlAlchemyRepos) -> Watchlist:
        watches = await repos.watches.watches_for(user_id)
        return Watchlist(watches=watches, properties=await repos.watches.properties_for(watches))

    return await run_in_uow("list_watches", SqlAlchemyUnitOfWork(session), _work)


async def unwatch_property(session: AsyncSession, *, user_id: str, property_id: str) -> UseCaseResult[bool]:
    async def _work(repos: SqlAlchemyRepos) -> bool:
        return await repos.watches.unwatch(user_id, property_id)

    return await run_in_uow("unwatch_property", SqlAlchemyUnitOfWork(session), _work)

# propguard/service_layer/use_cases/check.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from ...adapters.sqlalchemy_repos import SqlAlchemyRepos
from ...domain.address import require_address_fields
from ...domain.history import ListingHistorySummary
from ...models import CommunityAlert, Listing, Property
from ..results import UseCaseResult, run_in_uow
from ..unit_of_work import SqlAlchemyUnitOfWork

log = logging.getLogger(__name__)


@dataclass
class PropertyCheck:
    property: Property
    listings: list[Listing]
    alerts: list[CommunityAlert]
    history: ListingHistorySummary
    # geospatial proximity search is not part of this engine
    nearby_scams: int = 0


async def check_property(
    session: AsyncSession,
    *,
    user_id: str,
    address: str | None,
    city: str | None,
    state: str | None,
    country: str | None = None,
    listing_url: str | None = None,  # reserved
) -> UseCaseResult[PropertyCheck]:
    """
    Check a property: resolve-or-create, touch, gather listings/alerts/reports,
    count this check as a view of every alert, aggregate listing history.
    """

    async def _work(repos: SqlAlchemyRepos) -> PropertyCheck:
        require_address_fields(address, city, state)

        prop = await repos.properties.resolve(address, city, state, country)
        prop = await repos.properties.touch(prop)

        listings = await repos.listings.listings_for(prop.id)
        alerts = await repos.alerts.alerts_for(prop.id)
        reports = await repos.reports.reports_for(prop.id)

        for alert in alerts:
            await repos.alerts.bump_scan_count(alert.id)

        history = await repos.listings.summarize(prop.id)

        log.info(
            "checked property id=%s by=%s listings=%d alerts=%d reports=%d",
            prop.id, user_id, len(listings), len(alerts), len(reports),
        )
        return PropertyCheck(
            property=prop,
            listings=listings,
            alerts=alerts,
            history=history,
            nearby_scams=0,
        )

    return await run_in_uow("check_property", SqlAlchemyUnitOfWork(session), _work)

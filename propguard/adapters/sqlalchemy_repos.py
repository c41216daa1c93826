# propguard/adapters/sqlalchemy_repos.py
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from .repos.alerts import AlertRepository
from .repos.listings import ListingRepository
from .repos.properties import PropertyRepository
from .repos.reports import ReportRepository
from .repos.watches import WatchRepository


class SqlAlchemyRepos:
    """All engine components bound to one session (one request, one transaction)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.properties = PropertyRepository(session)
        self.listings = ListingRepository(session)
        self.alerts = AlertRepository(session)
        self.reports = ReportRepository(session, alerts=self.alerts)
        self.watches = WatchRepository(session, properties=self.properties)

# propguard/adapters/repos/reports.py
from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import settings
from ...domain.address import is_blank
from ...domain.errors import NotFoundError, ValidationError
from ...domain.severity import alert_title, severity_of, should_escalate
from ...integrations.outbox import enqueue_event
from ...models import Property, PropertyStatus, ReporterType, ScamReport, utcnow
from .alerts import AlertRepository

log = logging.getLogger(__name__)


class ReportRepository:
    """
    ScamReportRegistry.

    Owns the flag bookkeeping on Property (total_flags, first_flagged, status)
    and the escalation of high/critical reports into community alerts.
    """

    def __init__(self, session: AsyncSession, alerts: AlertRepository | None = None):
        self.session = session
        self.alerts = alerts or AlertRepository(session)

    async def reports_for(self, property_id: str) -> list[ScamReport]:
        q = (
            select(ScamReport)
            .where(ScamReport.property_id == property_id)
            .order_by(ScamReport.timestamp.asc())
        )
        return list((await self.session.execute(q)).scalars().all())

    async def file(
        self,
        *,
        property_id: str,
        reported_by: str,
        scam_type: str,
        description: str,
        evidence: list[str] | None = None,
        reporter_type: ReporterType = ReporterType.user,
    ) -> ScamReport:
        if is_blank(scam_type) or is_blank(description):
            raise ValidationError("scam_type and description are required")

        scam_type = scam_type.strip()
        severity = severity_of(scam_type)
        now = utcnow()

        # flag bookkeeping first: a missing property means nothing gets written
        bumped = await self.session.execute(
            update(Property)
            .where(Property.id == property_id)
            .values(total_flags=Property.total_flags + 1)
            .execution_options(synchronize_session=False)
        )
        if bumped.rowcount == 0:
            raise NotFoundError(f"property {property_id} not found")

        # set-once: only the first report stamps first_flagged and flips status
        await self.session.execute(
            update(Property)
            .where(Property.id == property_id, Property.first_flagged.is_(None))
            .values(first_flagged=now, status=PropertyStatus.flagged)
            .execution_options(synchronize_session=False)
        )
        # keep any Property already loaded in this session in step with the store
        await self.session.get(Property, property_id, populate_existing=True)

        report = ScamReport(
            property_id=property_id,
            reported_by=reported_by,
            reporter_type=reporter_type,
            scam_type=scam_type,
            severity=severity,
            description=description,
            evidence=list(evidence or []),
            timestamp=now,
            verified=False,
        )
        self.session.add(report)
        await self.session.flush()

        log.info(
            "filed report id=%s property_id=%s scam_type=%s severity=%s",
            report.id, property_id, scam_type, severity.value,
        )
        await enqueue_event(
            self.session,
            "scam_report.filed",
            {
                "report_id": report.id,
                "property_id": property_id,
                "scam_type": scam_type,
                "severity": severity.value,
                "timestamp": now.isoformat(),
            },
        )

        if should_escalate(severity):
            await self.alerts.raise_alert(
                property_id=property_id,
                title=alert_title(scam_type),
                message=description[: settings.ALERT_MESSAGE_MAX_LEN],
                severity=severity,
                created_by=reported_by,
            )

        return report

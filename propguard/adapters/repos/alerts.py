# propguard/adapters/repos/alerts.py
from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import settings
from ...domain.severity import alert_type_for
from ...integrations.outbox import enqueue_event
from ...models import CommunityAlert, Severity, utcnow

log = logging.getLogger(__name__)


class AlertRepository:
    """CommunityAlertBoard."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def raise_alert(
        self,
        *,
        property_id: str,
        title: str,
        message: str,
        severity: Severity,
        created_by: str,
    ) -> CommunityAlert:
        alert = CommunityAlert(
            property_id=property_id,
            title=title,
            message=message[: settings.ALERT_MESSAGE_MAX_LEN],
            alert_type=alert_type_for(severity),
            severity=severity,
            created_by=created_by,
            created_at=utcnow(),
            upvotes=0,
            downvotes=0,
            scan_count=1,
            is_active=True,
        )
        self.session.add(alert)
        await self.session.flush()

        log.info(
            "raised %s alert id=%s property_id=%s severity=%s",
            alert.alert_type.value, alert.id, property_id, severity.value,
        )
        await enqueue_event(
            self.session,
            "community_alert.raised",
            {
                "alert_id": alert.id,
                "property_id": property_id,
                "alert_type": alert.alert_type.value,
                "severity": severity.value,
                "title": alert.title,
                "created_at": alert.created_at.isoformat(),
            },
        )
        return alert

    async def alerts_for(self, property_id: str) -> list[CommunityAlert]:
        """Active and inactive alike; callers filter on is_active."""
        q = (
            select(CommunityAlert)
            .where(CommunityAlert.property_id == property_id)
            .order_by(CommunityAlert.created_at.asc())
        )
        return list((await self.session.execute(q)).scalars().all())

    async def bump_scan_count(self, alert_id: str) -> None:
        # relative increment in one statement: concurrent checks never lose a bump
        stmt = (
            update(CommunityAlert)
            .where(CommunityAlert.id == alert_id)
            .values(scan_count=CommunityAlert.scan_count + 1)
        )
        await self.session.execute(stmt)

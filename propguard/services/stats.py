# propguard/services/stats.py
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import CommunityAlert, Property, PropertyStatus, ScamReport


async def property_stats(session: AsyncSession) -> dict:
    """Store-wide counters for the dashboard. Read-only."""

    async def _count(stmt) -> int:
        return int((await session.execute(stmt)).scalar_one())

    total_properties = await _count(select(func.count()).select_from(Property))
    flagged = await _count(
        select(func.count()).select_from(Property).where(Property.status == PropertyStatus.flagged)
    )
    verified = await _count(
        select(func.count()).select_from(Property).where(Property.verified_scam == True)  # noqa: E712
    )
    active_alerts = await _count(
        select(func.count()).select_from(CommunityAlert).where(CommunityAlert.is_active == True)  # noqa: E712
    )
    total_reports = await _count(select(func.count()).select_from(ScamReport))

    rows = (
        await session.execute(
            select(ScamReport.scam_type, func.count()).group_by(ScamReport.scam_type)
        )
    ).all()

    return dict(
        total_properties=total_properties,
        flagged_properties=flagged,
        verified_scams=verified,
        active_alerts=active_alerts,
        total_reports=total_reports,
        scams_by_type={scam_type: int(n) for scam_type, n in rows},
    )

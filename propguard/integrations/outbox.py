# propguard/integrations/outbox.py
from __future__ import annotations

import json
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import OutboxEvent, OutboxStatus


async def enqueue_event(session: AsyncSession, event_type: str, payload: dict[str, Any]) -> OutboxEvent:
    """
    Record an event in the same transaction as the change that caused it.
    Delivery (email/push/webhook) is the notification collaborator's job; it
    reads pending rows from outbox_events.
    """
    ev = OutboxEvent(
        event_type=event_type,
        payload_json=json.dumps(payload, default=str),
        status=OutboxStatus.pending,
        attempts=0,
    )
    session.add(ev)
    await session.flush()
    return ev


async def pending_events(session: AsyncSession, limit: int = 50) -> list[OutboxEvent]:
    stmt = (
        select(OutboxEvent)
        .where(OutboxEvent.status == OutboxStatus.pending)
        .order_by(OutboxEvent.id.asc())
        .limit(limit)
    )
    return list((await session.execute(stmt)).scalars().all())

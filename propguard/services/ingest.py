# propguard/services/ingest.py
from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.parsing import get_first, to_float, to_str
from ..models import Listing, utcnow


def _price(payload: dict[str, Any]) -> float:
    p = to_float(get_first(payload, "price", "listPrice", "list_price"))
    # negative or missing => unknown
    if p is None or p < 0:
        return 0.0
    return p


async def record_listing(session: AsyncSession, property_id: str, payload: dict[str, Any]) -> Listing:
    """
    Ingestion side of the listing ledger: append one observed posting.

    Accepts scraper-style camelCase or snake_case keys. The engine itself
    never writes listings; this is the collaborator that does.
    """
    platform = to_str(get_first(payload, "platform", "source")) or "other"

    observed_at = get_first(payload, "observedAt", "observed_at", "listedDate")
    if isinstance(observed_at, str):
        observed_at = datetime.fromisoformat(observed_at.replace("Z", "+00:00")).replace(tzinfo=None)
    elif not isinstance(observed_at, datetime):
        observed_at = utcnow()

    listing = Listing(
        property_id=property_id,
        platform=platform.lower(),
        price=_price(payload),
        seller_phone=to_str(get_first(payload, "sellerPhone", "seller_phone")),
        seller_email=to_str(get_first(payload, "sellerEmail", "seller_email")),
        seller_name=to_str(get_first(payload, "sellerName", "seller_name")),
        observed_at=observed_at,
    )
    session.add(listing)
    await session.flush()
    return listing

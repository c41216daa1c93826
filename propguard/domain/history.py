# propguard/domain/history.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol


class ListingLike(Protocol):
    platform: str
    price: float
    seller_phone: str | None
    seller_email: str | None
    seller_name: str | None


@dataclass(frozen=True)
class PriceRange:
    min: float = 0.0
    max: float = 0.0


@dataclass(frozen=True)
class ListingHistorySummary:
    property_id: str
    total_listings: int
    platforms: frozenset[str]
    price_range: PriceRange
    avg_price: float
    unique_sellers: int
    # reserved: filled in by external collaborators, never computed here
    listing_frequency: float = 0.0
    suspicious_activity: list[Any] = field(default_factory=list)


def summarize_listings(property_id: str, listings: Iterable[ListingLike]) -> ListingHistorySummary:
    """
    Pure aggregate over a property's listings.

    Price stats only consider listings with a positive price (0 means unknown),
    but every listing counts toward total_listings. Sellers are counted by
    distinct non-empty contact values across phone, email and name.
    """
    rows = list(listings)

    prices = [float(l.price) for l in rows if l.price and l.price > 0]
    if prices:
        price_range = PriceRange(min=min(prices), max=max(prices))
        avg_price = sum(prices) / len(prices)
    else:
        price_range = PriceRange()
        avg_price = 0.0

    sellers: set[str] = set()
    for l in rows:
        for v in (l.seller_phone, l.seller_email, l.seller_name):
            if v and v.strip():
                sellers.add(v.strip())

    return ListingHistorySummary(
        property_id=property_id,
        total_listings=len(rows),
        platforms=frozenset(l.platform for l in rows),
        price_range=price_range,
        avg_price=avg_price,
        unique_sellers=len(sellers),
    )

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .domain.history import ListingHistorySummary
from .models import AlertType, PropertyStatus, Severity


class _Orm(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# -----------------------------
# Records
# -----------------------------
class PropertyOut(_Orm):
    id: str
    address: str
    city: str
    state: str
    country: str
    zip_code: str
    status: PropertyStatus
    last_checked: datetime
    total_flags: int
    verified_scam: bool
    first_flagged: datetime | None = None


class ListingOut(_Orm):
    id: str
    property_id: str
    platform: str
    price: float
    seller_phone: str | None = None
    seller_email: str | None = None
    seller_name: str | None = None
    observed_at: datetime


class CommunityAlertOut(_Orm):
    id: str
    property_id: str
    title: str
    message: str
    alert_type: AlertType
    severity: Severity
    created_by: str
    created_at: datetime
    upvotes: int
    downvotes: int
    scan_count: int
    is_active: bool


class PropertyWatchOut(_Orm):
    user_id: str
    property_id: str
    added_at: datetime
    last_checked: datetime
    notifications_enabled: bool
    alert_types: list[str]


class PriceRangeOut(BaseModel):
    min: float
    max: float


class ListingHistoryOut(BaseModel):
    property_id: str
    total_listings: int
    platforms: list[str]
    price_range: PriceRangeOut
    avg_price: float
    listing_frequency: float
    unique_sellers: int
    suspicious_activity: list = Field(default_factory=list)

    @classmethod
    def from_summary(cls, s: ListingHistorySummary) -> "ListingHistoryOut":
        return cls(
            property_id=s.property_id,
            total_listings=s.total_listings,
            platforms=sorted(s.platforms),
            price_range=PriceRangeOut(min=s.price_range.min, max=s.price_range.max),
            avg_price=s.avg_price,
            listing_frequency=s.listing_frequency,
            unique_sellers=s.unique_sellers,
            suspicious_activity=list(s.suspicious_activity),
        )


# -----------------------------
# Requests
# -----------------------------
class CheckPropertyRequest(BaseModel):
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    listing_url: str | None = None


class ReportScamRequest(BaseModel):
    property_id: str | None = None
    address: str | None = None
    scam_type: str | None = None
    description: str | None = None
    evidence: list[str] | None = None
    listing_url: str | None = None


class WatchPropertyRequest(BaseModel):
    property_id: str | None = None
    notifications_enabled: bool | None = None


# -----------------------------
# Responses
# -----------------------------
class CheckPropertyResponse(BaseModel):
    success: bool = True
    property: PropertyOut
    listings: list[ListingOut]
    alerts: list[CommunityAlertOut]
    history: ListingHistoryOut
    nearby_scams: int = 0


class ReportScamResponse(BaseModel):
    success: bool = True
    report_id: str
    message: str


class WatchPropertyResponse(BaseModel):
    success: bool = True
    watch: PropertyWatchOut


class WatchlistResponse(BaseModel):
    success: bool = True
    watches: list[PropertyWatchOut]
    properties: list[PropertyOut]


class UnwatchResponse(BaseModel):
    success: bool = True
    removed: bool


class PropertyStatsResponse(BaseModel):
    success: bool = True
    total_properties: int = Field(..., ge=0)
    flagged_properties: int = Field(..., ge=0)
    verified_scams: int = Field(..., ge=0)
    active_alerts: int = Field(..., ge=0)
    total_reports: int = Field(..., ge=0)
    scams_by_type: dict[str, int]


class DemoSeedResponse(BaseModel):
    success: bool = True
    seeded: int
    skipped: int


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: str

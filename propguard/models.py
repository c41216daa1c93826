# propguard/models.py
from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Float,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    # naive UTC; sqlite DateTime columns drop tzinfo anyway
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return uuid.uuid4().hex


# -----------------------------
# Core enums
# -----------------------------
class PropertyStatus(str, enum.Enum):
    active = "active"
    flagged = "flagged"
    resolved = "resolved"


class Severity(str, enum.Enum):
    medium = "medium"
    high = "high"
    critical = "critical"


class ReporterType(str, enum.Enum):
    user = "user"
    system = "system"


class AlertType(str, enum.Enum):
    warning = "warning"
    danger = "danger"


class OutboxStatus(str, enum.Enum):
    pending = "pending"
    delivered = "delivered"
    failed = "failed"


DEFAULT_WATCH_ALERT_TYPES: tuple[str, ...] = (
    "price_change",
    "new_listing",
    "scam_report",
    "community_alert",
)


# -----------------------------
# Models
# -----------------------------
class Property(Base):
    """
    Canonical real-world property. Address fields hold the canonical
    (trimmed, whitespace-collapsed, upper-cased) identity values.
    """
    __tablename__ = "properties"
    __table_args__ = (
        UniqueConstraint("address", "city", "state", "country", name="uq_property_identity"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)

    address: Mapped[str] = mapped_column(String(255))
    city: Mapped[str] = mapped_column(String(120))
    state: Mapped[str] = mapped_column(String(80))
    country: Mapped[str] = mapped_column(String(80), default="US")
    zip_code: Mapped[str] = mapped_column(String(20), default="")

    status: Mapped[PropertyStatus] = mapped_column(
        Enum(PropertyStatus), default=PropertyStatus.active, index=True
    )
    last_checked: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    total_flags: Mapped[int] = mapped_column(Integer, default=0)
    # only a trusted escalation path flips this; reports never do
    verified_scam: Mapped[bool] = mapped_column(Boolean, default=False)
    first_flagged: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)


class Listing(Base):
    __tablename__ = "listings"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    property_id: Mapped[str] = mapped_column(String(32), index=True)

    platform: Mapped[str] = mapped_column(String(60), index=True)
    price: Mapped[float] = mapped_column(Float, default=0.0)  # 0 => unknown

    seller_phone: Mapped[str | None] = mapped_column(String(60), nullable=True)
    seller_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    seller_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    observed_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)


class ScamReport(Base):
    __tablename__ = "scam_reports"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    property_id: Mapped[str] = mapped_column(String(32), index=True)

    reported_by: Mapped[str] = mapped_column(String(120), index=True)
    reporter_type: Mapped[ReporterType] = mapped_column(Enum(ReporterType), default=ReporterType.user)

    scam_type: Mapped[str] = mapped_column(String(80), index=True)
    severity: Mapped[Severity] = mapped_column(Enum(Severity), index=True)

    description: Mapped[str] = mapped_column(Text)
    evidence: Mapped[list[str]] = mapped_column(JSON, default=list)

    timestamp: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
    # set by moderation, never by this engine
    verified: Mapped[bool] = mapped_column(Boolean, default=False)


class CommunityAlert(Base):
    __tablename__ = "community_alerts"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    property_id: Mapped[str] = mapped_column(String(32), index=True)

    title: Mapped[str] = mapped_column(String(255))
    message: Mapped[str] = mapped_column(Text)

    alert_type: Mapped[AlertType] = mapped_column(Enum(AlertType))
    severity: Mapped[Severity] = mapped_column(Enum(Severity))

    created_by: Mapped[str] = mapped_column(String(120))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    upvotes: Mapped[int] = mapped_column(Integer, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, default=0)
    scan_count: Mapped[int] = mapped_column(Integer, default=1)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)


class PropertyWatch(Base):
    __tablename__ = "property_watches"

    user_id: Mapped[str] = mapped_column(String(120), primary_key=True)
    property_id: Mapped[str] = mapped_column(String(32), primary_key=True)

    added_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    last_checked: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    notifications_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    alert_types: Mapped[list[str]] = mapped_column(
        JSON, default=lambda: list(DEFAULT_WATCH_ALERT_TYPES)
    )


class OutboxEvent(Base):
    __tablename__ = "outbox_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    event_type: Mapped[str] = mapped_column(String(120), index=True)
    payload_json: Mapped[str] = mapped_column(Text)

    status: Mapped[OutboxStatus] = mapped_column(Enum(OutboxStatus), default=OutboxStatus.pending, index=True)
    attempts: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

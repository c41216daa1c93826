# propguard/domain/severity.py
from __future__ import annotations

from ..models import AlertType, Severity

# Single source of truth for escalation. Anything not listed is medium.
SEVERITY_BY_SCAM_TYPE: dict[str, Severity] = {
    "wire_fraud": Severity.critical,
    "seller_fraud": Severity.critical,
    "fake_listing": Severity.high,
    "rental_scam": Severity.high,
}

ESCALATING_SEVERITIES: frozenset[Severity] = frozenset({Severity.high, Severity.critical})


def severity_of(scam_type: str) -> Severity:
    return SEVERITY_BY_SCAM_TYPE.get((scam_type or "").strip().lower(), Severity.medium)


def should_escalate(severity: Severity) -> bool:
    return severity in ESCALATING_SEVERITIES


def alert_type_for(severity: Severity) -> AlertType:
    return AlertType.danger if severity == Severity.critical else AlertType.warning


def alert_title(scam_type: str) -> str:
    """wire_fraud -> 'WIRE FRAUD Reported'"""
    return f"{scam_type.strip().replace('_', ' ').upper()} Reported"

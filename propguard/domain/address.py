# propguard/domain/address.py
from __future__ import annotations

from dataclasses import dataclass

from .errors import ValidationError


@dataclass(frozen=True)
class AddressKey:
    """Identity key of a Property: the canonical (address, city, state, country) tuple."""

    address: str
    city: str
    state: str
    country: str


def canonical_part(value: str | None) -> str:
    # trim, collapse inner whitespace, case-fold to upper
    if value is None:
        return ""
    return " ".join(str(value).split()).upper()


def canonical_identity(
    address: str,
    city: str,
    state: str,
    country: str | None = None,
    *,
    default_country: str = "US",
) -> AddressKey:
    """
    Two submissions that differ only in case or whitespace produce the same key.
    A missing/blank country falls back to `default_country`.
    """
    return AddressKey(
        address=canonical_part(address),
        city=canonical_part(city),
        state=canonical_part(state),
        country=canonical_part(country) or canonical_part(default_country),
    )


def is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def require_address_fields(address: str | None, city: str | None, state: str | None) -> None:
    if is_blank(address) or is_blank(city) or is_blank(state):
        raise ValidationError("address, city, and state are required")


def parse_free_text_address(raw: str | None) -> tuple[str, str, str] | None:
    """
    "123 Main St, Austin, TX[, ...]" -> ("123 Main St", "Austin", "TX").

    Returns None when fewer than three non-blank comma-separated parts exist.
    Anything after the third part (zip, country) is ignored.
    """
    if not raw:
        return None
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) < 3:
        return None
    addr, city, state = parts[0], parts[1], parts[2]
    if not (addr and city and state):
        return None
    return addr, city, state

"""
SouqRank — Listing date helpers

A listing carries two optional timestamps. Every age-based rule uses the
publish date when present and falls back to the creation date; what happens
when both are missing is decided by each caller.
"""

from __future__ import annotations

from datetime import datetime, timezone

_MS_PER_DAY = 86_400_000


def parse_timestamp(value: datetime | str | None) -> datetime | None:
    """
    Normalize a timestamp to an aware UTC-comparable datetime.

    Accepts None, a datetime, or an ISO-8601 string (``Z`` suffix allowed).
    Naive values are treated as UTC.

    Raises:
        ValueError: If a string is not a valid ISO-8601 timestamp.
    """
    if value is None:
        return None
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def effective_listing_date(
    published_at: datetime | None,
    created_at: datetime | None,
) -> datetime | None:
    """Return published_at if set, else created_at, else None."""
    if published_at is not None:
        return published_at
    return created_at


def days_between(earlier: datetime, now: datetime) -> float:
    """Fractional days from ``earlier`` to ``now``. Negative for future dates."""
    delta_ms = (now - earlier).total_seconds() * 1000
    return delta_ms / _MS_PER_DAY


def utc_now() -> datetime:
    return datetime.now(timezone.utc)

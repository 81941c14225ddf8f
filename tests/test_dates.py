"""Tests for listing date helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from souqrank.utils.dates import days_between, effective_listing_date, parse_timestamp


class TestParseTimestamp:
    def test_none_and_blank(self) -> None:
        assert parse_timestamp(None) is None
        assert parse_timestamp("  ") is None

    def test_z_suffix(self) -> None:
        assert parse_timestamp("2026-01-15T08:30:00Z") == datetime(
            2026, 1, 15, 8, 30, tzinfo=timezone.utc
        )

    def test_offset_is_kept(self) -> None:
        parsed = parse_timestamp("2026-01-15T10:30:00+02:00")
        assert parsed == datetime(2026, 1, 15, 8, 30, tzinfo=timezone.utc)

    def test_naive_is_treated_as_utc(self) -> None:
        assert parse_timestamp(datetime(2026, 1, 15)).tzinfo == timezone.utc
        assert parse_timestamp("2026-01-15T00:00:00").tzinfo == timezone.utc

    def test_invalid_string_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")


def test_effective_listing_date_prefers_published() -> None:
    published = datetime(2026, 2, 1, tzinfo=timezone.utc)
    created = datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert effective_listing_date(published, created) == published
    assert effective_listing_date(None, created) == created
    assert effective_listing_date(None, None) is None


def test_days_between_is_fractional_and_signed() -> None:
    now = datetime(2026, 3, 1, 12, tzinfo=timezone.utc)
    assert days_between(now - timedelta(hours=36), now) == pytest.approx(1.5)
    assert days_between(now + timedelta(days=2), now) == pytest.approx(-2.0)

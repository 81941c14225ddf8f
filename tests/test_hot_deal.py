"""
Tests for the hot-deal badge.

All four conditions are required: age <= 7 days, views >= 10,
saves/views > 0.15, saves >= 3.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from souqrank.engine.hot_deal import is_hot_deal


def test_all_conditions_met_at_boundaries(now: datetime) -> None:
    """views=10, saves=3 (ratio 0.3) at exactly 7 days is a hot deal."""
    assert is_hot_deal(10, 3, now - timedelta(days=7), now) is True


def test_two_saves_is_not_enough(now: datetime) -> None:
    assert is_hot_deal(10, 2, now - timedelta(days=7), now) is False


def test_eight_days_old_is_too_old(now: datetime) -> None:
    assert is_hot_deal(10, 3, now - timedelta(days=8), now) is False


def test_fewer_than_ten_views(now: datetime) -> None:
    assert is_hot_deal(9, 3, now - timedelta(days=1), now) is False


def test_save_ratio_must_exceed_fifteen_percent(now: datetime) -> None:
    listing_date = now - timedelta(days=2)
    assert is_hot_deal(20, 3, listing_date, now) is False  # exactly 0.15
    assert is_hot_deal(19, 3, listing_date, now) is True


def test_high_views_alone_are_not_hot(now: datetime) -> None:
    assert is_hot_deal(5_000, 10, now - timedelta(days=1), now) is False


def test_requires_a_date(now: datetime) -> None:
    assert is_hot_deal(100, 50, None, now) is False


def test_negative_counts_are_not_hot(now: datetime) -> None:
    assert is_hot_deal(-10, -3, now, now) is False

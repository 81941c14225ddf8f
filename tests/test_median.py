"""
Tests for the median price aggregator.

Groups by lower(trim(brand)) | lower(trim(model)), suppresses groups with a
single sample, and returns the standard median.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from souqrank.engine.median import (
    MedianSample,
    compute_median_prices,
    lookup_median_price,
    median_price_key,
    median_window_start,
)


def _samples(brand: str | None, model: str | None, *prices: float) -> list[MedianSample]:
    return [MedianSample(brand=brand, model=model, price=p) for p in prices]


class TestMedianPriceKey:
    def test_lowercases_and_trims(self) -> None:
        assert median_price_key("  Apple ", " iPhone 12 ") == "apple|iphone 12"

    def test_missing_model_is_empty_segment(self) -> None:
        assert median_price_key("Samsung", None) == "samsung|"

    def test_missing_brand_is_empty_segment(self) -> None:
        assert median_price_key(None, "Corolla") == "|corolla"

    def test_both_missing_has_no_key(self) -> None:
        assert median_price_key(None, None) is None
        assert median_price_key("", "") is None


class TestComputeMedianPrices:
    def test_odd_count_takes_middle_value(self) -> None:
        medians = compute_median_prices(_samples("Apple", "iPhone 12", 300, 100, 200))
        assert medians == {"apple|iphone 12": 200}

    def test_even_count_averages_middle_pair(self) -> None:
        medians = compute_median_prices(_samples("Apple", "iPhone 12", 400, 100, 300, 200))
        assert medians == {"apple|iphone 12": 250}

    def test_single_listing_group_is_suppressed(self) -> None:
        samples = _samples("Apple", "iPhone 12", 100, 200) + _samples("Nokia", "3310", 50)
        medians = compute_median_prices(samples)
        assert "nokia|3310" not in medians
        assert medians == {"apple|iphone 12": 150}

    def test_grouping_ignores_case_and_whitespace(self) -> None:
        samples = [
            MedianSample("Apple", "iPhone 12", 100),
            MedianSample(" APPLE", "iphone 12 ", 200),
            MedianSample("apple", "IPHONE 12", 600),
        ]
        assert compute_median_prices(samples) == {"apple|iphone 12": 200}

    def test_brand_without_model_forms_its_own_group(self) -> None:
        samples = _samples("Samsung", None, 100, 300) + _samples("Samsung", "S21", 500, 700)
        medians = compute_median_prices(samples)
        assert medians == {"samsung|": 200, "samsung|s21": 600}

    def test_samples_without_brand_are_skipped(self) -> None:
        samples = _samples(None, "Corolla", 100, 200) + _samples("  ", "Corolla", 300, 400)
        assert compute_median_prices(samples) == {}

    def test_empty_input_gives_empty_map(self) -> None:
        assert compute_median_prices([]) == {}

    def test_accepts_any_iterable(self) -> None:
        generator = (s for s in _samples("LG", "G8", 10, 20, 30))
        assert compute_median_prices(generator) == {"lg|g8": 20}

    def test_min_samples_override(self) -> None:
        samples = _samples("Apple", "iPhone 12", 100, 200)
        assert compute_median_prices(samples, min_samples=3) == {}
        assert compute_median_prices(_samples("Nokia", "3310", 50), min_samples=1) == {"nokia|3310": 50}

    def test_medians_are_floats(self) -> None:
        medians = compute_median_prices(_samples("Apple", "iPhone 12", 100, 201))
        assert medians["apple|iphone 12"] == pytest.approx(150.5)
        assert isinstance(medians["apple|iphone 12"], float)


class TestLookup:
    def test_lookup_normalizes_listing_brand_and_model(self) -> None:
        medians = {"apple|iphone 12": 250.0}
        assert lookup_median_price(medians, "Apple", "iPhone 12 ") == 250.0

    def test_lookup_missing_key(self) -> None:
        assert lookup_median_price({"apple|iphone 12": 250.0}, "Apple", "iPhone 13") is None

    def test_lookup_without_brand_or_model(self) -> None:
        assert lookup_median_price({"|": 1.0}, None, None) is None


class TestWindow:
    def test_default_window_is_thirty_days(self, now: datetime) -> None:
        assert median_window_start(now) == now - timedelta(days=30)

    def test_custom_window(self, now: datetime) -> None:
        assert median_window_start(now, window_days=7) == now - timedelta(days=7)

    def test_non_positive_window_raises(self, now: datetime) -> None:
        with pytest.raises(ValueError, match="window_days must be greater than 0"):
            median_window_start(now, window_days=0)

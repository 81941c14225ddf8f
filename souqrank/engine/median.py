"""
SouqRank — Median Price Aggregator

Builds the market baseline used by the price-fairness component:

    key    = lower(trim(brand)) + "|" + lower(trim(model or ""))
    median = statistics.median(prices)   (two-point average for even counts)

Only groups with at least MEDIAN_MIN_SAMPLES prices get an entry; a missing
key means "not enough data", never an error.

The caller restricts the input to available listings published within the
trailing window (see median_window_start) before aggregating, so the
median reflects current market conditions.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta
from statistics import median
from typing import NamedTuple

import structlog

from souqrank.config import settings

logger = structlog.get_logger(__name__)


class MedianSample(NamedTuple):
    """One listing's contribution to the median map."""
    brand: str | None
    model: str | None
    price: float


def median_price_key(brand: str | None, model: str | None) -> str | None:
    """
    Composite lookup key for a brand+model cohort.

    Returns None when both segments are absent; a missing segment becomes
    the empty string.
    """
    if not brand and not model:
        return None
    return f"{(brand or '').strip().lower()}|{(model or '').strip().lower()}"


def compute_median_prices(
    samples: Iterable[MedianSample],
    min_samples: int | None = None,
) -> dict[str, float]:
    """
    Group samples by brand+model and compute each group's median price.

    Samples without a brand are skipped. Groups smaller than ``min_samples``
    are left out of the result.

    Args:
        samples: Prices with their brand and model.
        min_samples: Group-size floor (default: settings.MEDIAN_MIN_SAMPLES).

    Returns:
        Mapping of composite key to median price. Empty for empty input.
    """
    floor = min_samples if min_samples is not None else settings.MEDIAN_MIN_SAMPLES

    groups: dict[str, list[float]] = defaultdict(list)
    skipped = 0
    for sample in samples:
        if not sample.brand or not sample.brand.strip():
            skipped += 1
            continue
        key = median_price_key(sample.brand, sample.model)
        groups[key].append(float(sample.price))

    medians: dict[str, float] = {}
    for key, prices in groups.items():
        if len(prices) < floor:
            continue
        medians[key] = float(median(prices))

    logger.debug(
        "median_prices_computed",
        groups=len(groups),
        medians=len(medians),
        skipped_no_brand=skipped,
        min_samples=floor,
    )
    return medians


def lookup_median_price(
    median_prices: Mapping[str, float],
    brand: str | None,
    model: str | None,
) -> float | None:
    """Median for the listing's cohort, or None when there is no entry."""
    key = median_price_key(brand, model)
    if key is None:
        return None
    return median_prices.get(key)


def median_window_start(now: datetime, window_days: int | None = None) -> datetime:
    """
    Earliest publish time a listing may have to count toward the median.

    Raises:
        ValueError: If window_days is not positive.
    """
    days = window_days if window_days is not None else settings.MEDIAN_WINDOW_DAYS
    if days <= 0:
        raise ValueError("window_days must be greater than 0")
    return now - timedelta(days=days)

"""
SouqRank - Price Fairness Component

Compares the asking price to the brand+model market median:

    ratio = price / median_price
    ratio <= 1.0:  score = min(1, 0.8 + (1 - ratio) * 0.4)
    ratio >  1.0:  score = max(0.2, 1 - min(0.7, (ratio - 1) * 0.7))

A price within 10% of the median either way is "fair". Without a positive
median the score is neutral (0.5) and the listing can never be fair.
"""

from __future__ import annotations

from typing import NamedTuple

import structlog

from souqrank.config import DEFAULT_RANKING_POLICY, RankingPolicy

logger = structlog.get_logger(__name__)


class PriceFairness(NamedTuple):
    """Price-fairness component and the fair-price flag."""
    score: float
    is_fair: bool


def calculate_price_fair_score(
    price: float,
    median_price: float | None,
    policy: RankingPolicy = DEFAULT_RANKING_POLICY,
) -> PriceFairness:
    """
    Score how the asking price compares to the market median.

    Args:
        price: Asking price in local currency.
        median_price: Median for the same brand+model, or None.
        policy: Ranking weights and thresholds.

    Returns:
        PriceFairness(score in [0, 1], is_fair).
    """
    if median_price is None or median_price <= 0:
        return PriceFairness(score=policy.PRICE_NEUTRAL, is_fair=False)

    ratio = price / median_price
    is_fair = policy.FAIR_RATIO_LOW <= ratio <= policy.FAIR_RATIO_HIGH

    if ratio <= 1.0:
        score = min(1.0, policy.PRICE_AT_MEDIAN + (1 - ratio) * policy.PRICE_BELOW_SLOPE)
    else:
        penalty = min(policy.PRICE_MAX_PENALTY, (ratio - 1) * policy.PRICE_ABOVE_SLOPE)
        score = max(policy.PRICE_FLOOR, 1 - penalty)

    logger.debug(
        "price_fairness_scored",
        price=price,
        median_price=median_price,
        ratio=round(ratio, 6),
        score=score,
        is_fair=is_fair,
    )
    return PriceFairness(score=score, is_fair=is_fair)

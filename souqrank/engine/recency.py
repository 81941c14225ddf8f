"""
SouqRank - Recency Component

Exponential decay over the listing's age:

    recency = exp(-days_since_published / 30)

About 63% of the score is gone by day 30 and 86% by day 60. A listing with
no publish or create date gets the neutral 0.5 instead of being treated as
infinitely old.
"""

from __future__ import annotations

import math
from datetime import datetime

import structlog

from souqrank.config import DEFAULT_RANKING_POLICY, RankingPolicy
from souqrank.utils.dates import days_between

logger = structlog.get_logger(__name__)


def calculate_recency_score(
    listing_date: datetime | None,
    now: datetime,
    policy: RankingPolicy = DEFAULT_RANKING_POLICY,
) -> float:
    """
    Score listing freshness in [0, 1].

    Args:
        listing_date: Effective listing date (publish, else create), or None.
        now: Reference time.
        policy: Ranking weights and thresholds.

    Returns:
        exp(-age/RECENCY_DECAY_DAYS) clamped to [0, 1]; a future date
        scores 1.0, a missing date RECENCY_NEUTRAL.
    """
    if listing_date is None:
        return policy.RECENCY_NEUTRAL

    age_days = days_between(listing_date, now)
    if age_days <= 0:
        recency = 1.0
    else:
        recency = math.exp(-age_days / policy.RECENCY_DECAY_DAYS)

    logger.debug("recency_scored", age_days=round(age_days, 4), recency=recency)
    return recency

"""
SouqRank - Hot Deal Badge

A listing is a hot deal when ALL of these hold:
- it has a publish or create date, at most 7 days old
- it has at least 10 views
- more than 15% of viewers saved it
- it has at least 3 saves

The badge does not feed into the composite score.
"""

from __future__ import annotations

from datetime import datetime

import structlog

from souqrank.config import DEFAULT_RANKING_POLICY, RankingPolicy
from souqrank.utils.dates import days_between

logger = structlog.get_logger(__name__)


def is_hot_deal(
    view_count: float,
    save_count: float,
    listing_date: datetime | None,
    now: datetime,
    policy: RankingPolicy = DEFAULT_RANKING_POLICY,
) -> bool:
    """Return True for fresh listings with disproportionate save interest."""
    if listing_date is None:
        return False

    age_days = days_between(listing_date, now)
    if age_days > policy.HOT_DEAL_MAX_AGE_DAYS:
        return False

    views = max(0.0, float(view_count))
    saves = max(0.0, float(save_count))
    if views < policy.HOT_DEAL_MIN_VIEWS:
        return False

    save_ratio = saves / views
    hot = save_ratio > policy.HOT_DEAL_MIN_SAVE_RATIO and saves >= policy.HOT_DEAL_MIN_SAVES

    if hot:
        logger.debug(
            "hot_deal_detected",
            age_days=round(age_days, 4),
            views=views,
            saves=saves,
            save_ratio=round(save_ratio, 4),
        )
    return hot

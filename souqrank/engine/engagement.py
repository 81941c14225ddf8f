"""
SouqRank - Engagement Component (with anti-spam throttling)

Three buyer-interest signals, each log-scaled against its own ceiling:

    metric_score = min(1, log(count + 1) / log(ceiling + 1))
    engagement   = 0.40*views + 0.35*saves + 0.25*clicks

Anti-spam before scaling:
- More than 100 views/day since the listing went live: views are capped at
  100 * age_days instead of being discarded.
- Saves above 50% of views: saves are capped at views * 0.5.
WhatsApp clicks are not throttled.

The listing age is floored at 1 day. A listing with no date at all is
treated as 1 day old here, unlike the recency component which falls back to
its neutral score.
"""

from __future__ import annotations

import math
from datetime import datetime

import structlog

from souqrank.config import DEFAULT_RANKING_POLICY, RankingPolicy
from souqrank.utils.dates import days_between

logger = structlog.get_logger(__name__)


def _log_scaled(count: float, ceiling: int) -> float:
    return min(1.0, math.log(count + 1) / math.log(ceiling + 1))


def throttle_views(views: float, age_days: float, max_views_per_day: float) -> float:
    """Cap bot-inflated view bursts at max_views_per_day * age_days."""
    if views / age_days > max_views_per_day:
        return max_views_per_day * age_days
    return views


def throttle_saves(saves: float, views: float, max_saves_ratio: float) -> float:
    """Cap saves at views * max_saves_ratio when the save rate is implausible."""
    save_ratio = saves / views if views > 0 else 0.0
    if save_ratio > max_saves_ratio:
        return views * max_saves_ratio
    return saves


def calculate_engagement_score(
    view_count: float,
    save_count: float,
    whatsapp_click_count: float,
    listing_date: datetime | None,
    now: datetime,
    policy: RankingPolicy = DEFAULT_RANKING_POLICY,
) -> float:
    """
    Score buyer interest in [0, 1].

    Args:
        view_count: Listing views (negative treated as 0).
        save_count: Times saved (negative treated as 0).
        whatsapp_click_count: Contact clicks (negative treated as 0).
        listing_date: Effective listing date, or None (treated as 1 day old).
        now: Reference time.
        policy: Ranking weights and thresholds.

    Returns:
        Weighted mix of the log-scaled view, save and click scores.
    """
    views = max(0.0, float(view_count))
    saves = max(0.0, float(save_count))
    clicks = max(0.0, float(whatsapp_click_count))

    age_days = 1.0
    if listing_date is not None:
        age_days = max(1.0, days_between(listing_date, now))

    adjusted_views = throttle_views(views, age_days, policy.MAX_VIEWS_PER_DAY)
    # Save ratio is judged against the raw view count
    adjusted_saves = throttle_saves(saves, views, policy.MAX_SAVES_RATIO)

    view_score = _log_scaled(adjusted_views, policy.VIEW_CEILING)
    save_score = _log_scaled(adjusted_saves, policy.SAVE_CEILING)
    click_score = _log_scaled(clicks, policy.CLICK_CEILING)

    engagement = (
        view_score * policy.ENGAGEMENT_VIEW_WEIGHT
        + save_score * policy.ENGAGEMENT_SAVE_WEIGHT
        + click_score * policy.ENGAGEMENT_CLICK_WEIGHT
    )

    if adjusted_views != views or adjusted_saves != saves:
        logger.debug(
            "engagement_throttled",
            views=views,
            adjusted_views=adjusted_views,
            saves=saves,
            adjusted_saves=adjusted_saves,
            age_days=round(age_days, 4),
        )

    logger.debug(
        "engagement_scored",
        view_score=view_score,
        save_score=save_score,
        click_score=click_score,
        engagement=engagement,
    )
    return engagement

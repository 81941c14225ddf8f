"""
SouqRank — Listing Ranking Engine

    rank = 0.35*trust + 0.20*quality + 0.15*recency + 0.20*price_fair
           + 0.10*engagement + featured_bonus

Each of the five organic components is normalized to [0, 1]; the featured
bonus (0.15) is layered on top, so scores fall in [0, 1.15]. Badges are
derived alongside the score but are not weighted into it.

The engine is a pure function of its input, the reference time and the
policy. Input validation happens when RankingInput is constructed; scoring
itself never raises and clamps out-of-range numbers.
"""

from __future__ import annotations

from datetime import datetime
from typing import NamedTuple

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

from souqrank.config import DEFAULT_RANKING_POLICY, RankingPolicy
from souqrank.engine.engagement import calculate_engagement_score
from souqrank.engine.hot_deal import is_hot_deal
from souqrank.engine.price_fairness import calculate_price_fair_score
from souqrank.engine.quality import calculate_quality_score
from souqrank.engine.recency import calculate_recency_score
from souqrank.engine.trust import calculate_trust_score
from souqrank.utils.dates import effective_listing_date, parse_timestamp, utc_now

logger = structlog.get_logger(__name__)

_MAX_COUNTER = 2**53


# ---------------------------------------------------------------------------
# Input / output types
# ---------------------------------------------------------------------------


class RankingInput(BaseModel):
    """
    Snapshot of one listing as seen by the ranker.

    Built per listing per search; never persisted. Non-numeric or non-finite
    numbers and unparseable timestamps are rejected here.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    # Trust
    seller_trust_score: float = Field(default=0, description="Seller reputation, 0-100")
    seller_verified: bool = False

    # Quality
    title: str = ""
    description: str | None = None
    images: tuple[str, ...] = ()
    brand: str | None = None
    model: str | None = None
    condition: str | None = None

    # Recency
    published_at: datetime | None = None
    created_at: datetime | None = None

    # Engagement (bounded so counters always convert to float)
    view_count: int = Field(default=0, le=_MAX_COUNTER)
    save_count: int = Field(default=0, le=_MAX_COUNTER)
    whatsapp_click_count: int = Field(default=0, le=_MAX_COUNTER)

    # Price fairness
    price: float
    median_price: float | None = Field(
        default=None, description="Median for the same brand+model, last 30 days"
    )

    featured: bool = False

    @field_validator("images", mode="before")
    @classmethod
    def _none_images_to_empty(cls, v):
        return () if v is None else v

    @field_validator("published_at", "created_at", mode="after")
    @classmethod
    def _as_utc(cls, v: datetime | None) -> datetime | None:
        return parse_timestamp(v)

    @property
    def listing_date(self) -> datetime | None:
        """Publish date, falling back to creation date."""
        return effective_listing_date(self.published_at, self.created_at)


class RankingBadges(NamedTuple):
    verified_seller: bool
    fair_price: bool
    hot_deal: bool


class RankingComponents(NamedTuple):
    """Normalized components; featured_bonus is 0 or the policy bonus."""
    trust: float
    quality: float
    recency: float
    price_fair: float
    engagement: float
    featured_bonus: float


class RankingResult(NamedTuple):
    score: float
    badges: RankingBadges
    components: RankingComponents


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


def calculate_listing_rank(
    ranking_input: RankingInput,
    now: datetime | None = None,
    policy: RankingPolicy = DEFAULT_RANKING_POLICY,
) -> RankingResult:
    """
    Score one listing and derive its badges.

    Args:
        ranking_input: Listing snapshot.
        now: Reference time (default: current UTC time). Pass a fixed value
             for reproducible scores.
        policy: Ranking weights and thresholds.

    Returns:
        RankingResult with the composite score, badges and components.
    """
    now = parse_timestamp(now) if now is not None else utc_now()
    listing_date = ranking_input.listing_date

    trust = calculate_trust_score(
        ranking_input.seller_trust_score, ranking_input.seller_verified, policy
    )
    quality = calculate_quality_score(
        ranking_input.title,
        ranking_input.description,
        ranking_input.images,
        ranking_input.brand,
        ranking_input.model,
        ranking_input.condition,
        policy,
    )
    recency = calculate_recency_score(listing_date, now, policy)
    engagement = calculate_engagement_score(
        ranking_input.view_count,
        ranking_input.save_count,
        ranking_input.whatsapp_click_count,
        listing_date,
        now,
        policy,
    )
    price_fair, is_fair = calculate_price_fair_score(
        ranking_input.price, ranking_input.median_price, policy
    )
    featured_bonus = policy.FEATURED_BONUS if ranking_input.featured else 0.0

    score = (
        policy.WEIGHT_TRUST * trust
        + policy.WEIGHT_QUALITY * quality
        + policy.WEIGHT_RECENCY * recency
        + policy.WEIGHT_PRICE_FAIR * price_fair
        + policy.WEIGHT_ENGAGEMENT * engagement
        + featured_bonus
    )

    badges = RankingBadges(
        verified_seller=ranking_input.seller_verified,
        fair_price=is_fair and ranking_input.median_price is not None,
        hot_deal=is_hot_deal(
            ranking_input.view_count,
            ranking_input.save_count,
            listing_date,
            now,
            policy,
        ),
    )
    components = RankingComponents(
        trust=trust,
        quality=quality,
        recency=recency,
        price_fair=price_fair,
        engagement=engagement,
        featured_bonus=featured_bonus,
    )

    logger.debug(
        "listing_ranked",
        score=score,
        policy_version=policy.version,
        verified_seller=badges.verified_seller,
        fair_price=badges.fair_price,
        hot_deal=badges.hot_deal,
    )
    return RankingResult(score=score, badges=badges, components=components)

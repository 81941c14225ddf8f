"""
SouqRank — Best-Match Ordering

Scores each candidate listing with the ranking engine and orders the result
set for the "best match" sort:

1. score, descending
2. effective listing date (publish, else create), newest first; undated last
3. listing id, ascending

Scoring is independent per listing; only the final sort is global.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import NamedTuple

import structlog

from souqrank.config import DEFAULT_RANKING_POLICY, RankingPolicy, settings
from souqrank.engine.median import lookup_median_price
from souqrank.engine.ranking import RankingInput, RankingResult, calculate_listing_rank
from souqrank.models.listing import Listing
from souqrank.utils.dates import effective_listing_date, parse_timestamp, utc_now

logger = structlog.get_logger(__name__)


class RankedListing(NamedTuple):
    """A listing with its ranking result; result is None in fallback order."""
    listing: Listing
    result: RankingResult | None


def build_ranking_input(
    listing: Listing,
    median_prices: Mapping[str, float],
) -> RankingInput:
    """
    Map a listing row (seller loaded) to a RankingInput.

    Null counters become 0; a seller without a trust score gets
    settings.DEFAULT_SELLER_TRUST_SCORE.
    """
    seller = listing.seller
    trust_score = seller.trust_score if seller and seller.trust_score is not None else None

    return RankingInput(
        seller_trust_score=(
            trust_score if trust_score is not None else settings.DEFAULT_SELLER_TRUST_SCORE
        ),
        seller_verified=bool(seller.verified) if seller else False,
        title=listing.title or "",
        description=listing.description,
        images=listing.images or (),
        brand=listing.brand,
        model=listing.model,
        condition=listing.condition,
        published_at=listing.published_at,
        created_at=listing.created_at,
        view_count=listing.view_count or 0,
        save_count=listing.save_count or 0,
        whatsapp_click_count=listing.whatsapp_click_count or 0,
        price=float(listing.price_ils),
        median_price=lookup_median_price(median_prices, listing.brand, listing.model),
        featured=bool(listing.featured),
    )


def score_listings(
    listings: Iterable[Listing],
    median_prices: Mapping[str, float],
    now: datetime | None = None,
    policy: RankingPolicy = DEFAULT_RANKING_POLICY,
) -> list[RankedListing]:
    """
    Score every listing, keeping the input order.

    Raises:
        ValueError: If a row cannot be mapped to a RankingInput. The offending
            listing id is logged before the error propagates.
    """
    now = parse_timestamp(now) if now is not None else utc_now()
    scored: list[RankedListing] = []
    for listing in listings:
        try:
            ranking_input = build_ranking_input(listing, median_prices)
        except ValueError as e:
            logger.warning(
                "listing_not_rankable",
                listing_id=listing.id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        scored.append(
            RankedListing(
                listing=listing,
                result=calculate_listing_rank(ranking_input, now=now, policy=policy),
            )
        )
    return scored


def _best_match_key(ranked: RankedListing) -> tuple[float, float, str]:
    listing_date = effective_listing_date(
        parse_timestamp(ranked.listing.published_at),
        parse_timestamp(ranked.listing.created_at),
    )
    # Negate so a single ascending sort gives score desc, date desc, id asc
    date_key = -listing_date.timestamp() if listing_date is not None else float("inf")
    return (-ranked.result.score, date_key, ranked.listing.id)


def rank_listings(
    listings: Iterable[Listing],
    median_prices: Mapping[str, float],
    now: datetime | None = None,
    policy: RankingPolicy = DEFAULT_RANKING_POLICY,
) -> list[RankedListing]:
    """
    Score and order listings for the best-match sort.

    Args:
        listings: Candidate listings with seller loaded.
        median_prices: Brand+model median map (may be empty).
        now: Reference time (default: current UTC time).
        policy: Ranking weights and thresholds.

    Returns:
        RankedListings ordered by score, then recency, then id.
    """
    ranked = sorted(score_listings(listings, median_prices, now, policy), key=_best_match_key)

    logger.info(
        "listings_ranked",
        count=len(ranked),
        median_cohorts=len(median_prices),
        top_score=round(ranked[0].result.score, 6) if ranked else None,
        policy_version=policy.version,
    )
    return ranked

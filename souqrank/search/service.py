"""
SouqRank — Search Service

Runs one search request end to end:

    ListingFilter -> candidate listings -> median map -> ranking -> ordering

Failure policy:
- median retrieval fails: rank with an empty median map (neutral price
  fairness, no fair-price badges)
- ranking fails: return candidates in their fetched order, unscored
- candidate retrieval fails: the error propagates
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from souqrank.config import DEFAULT_RANKING_POLICY, RankingPolicy, SortOrder, settings
from souqrank.search.best_match import RankedListing, rank_listings, score_listings
from souqrank.search.filters import ListingFilter
from souqrank.search.repository import fetch_candidate_listings, fetch_median_prices
from souqrank.utils.dates import parse_timestamp, utc_now

logger = structlog.get_logger(__name__)


class SearchService:
    """Search orchestration over an async session factory."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        policy: RankingPolicy = DEFAULT_RANKING_POLICY,
    ):
        self.session_factory = session_factory
        self.policy = policy
        # In-memory median cache: {"medians": dict, "fetched_at": datetime}
        self._median_cache: dict[str, Any] = {}

    def invalidate_median_cache(self) -> None:
        self._median_cache.clear()

    async def get_median_prices(self, now: datetime | None = None) -> dict[str, float]:
        """
        Median price map, cached for MEDIAN_CACHE_TTL_SECONDS.

        Returns an empty map (and does not cache it) when the query fails.
        """
        now = parse_timestamp(now) if now is not None else utc_now()

        if self._median_cache:
            age_seconds = (now - self._median_cache["fetched_at"]).total_seconds()
            if 0 <= age_seconds < settings.MEDIAN_CACHE_TTL_SECONDS:
                logger.debug(
                    "median_cache_hit",
                    age_seconds=int(age_seconds),
                    cohorts=len(self._median_cache["medians"]),
                )
                return self._median_cache["medians"]

        try:
            async with self.session_factory() as session:
                medians = await fetch_median_prices(session, now)
        except Exception as e:
            logger.warning(
                "median_prices_unavailable",
                error=str(e),
                error_type=type(e).__name__,
            )
            return {}

        self._median_cache["medians"] = medians
        self._median_cache["fetched_at"] = now
        return medians

    async def search(
        self,
        listing_filter: ListingFilter,
        now: datetime | None = None,
    ) -> list[RankedListing]:
        """
        Fetch, score and order listings for one search request.

        Best-match results are ordered by the ranker; every other sort keeps
        the database order and carries scores only for badge display.
        """
        now = parse_timestamp(now) if now is not None else utc_now()

        async with self.session_factory() as session:
            listings = await fetch_candidate_listings(session, listing_filter)

        if not listings:
            return []

        median_prices = await self.get_median_prices(now)

        try:
            if listing_filter.sort == SortOrder.BEST_MATCH:
                return rank_listings(listings, median_prices, now=now, policy=self.policy)
            return score_listings(listings, median_prices, now=now, policy=self.policy)
        except Exception as e:
            logger.warning(
                "ranking_failed_using_fallback_order",
                error=str(e),
                error_type=type(e).__name__,
                count=len(listings),
                sort=listing_filter.sort.value,
            )
            return [RankedListing(listing=listing, result=None) for listing in listings]

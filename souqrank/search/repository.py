"""
SouqRank — Listing Retrieval

Read-only queries against the marketplace database:

- fetch_candidate_listings(): available listings matching a ListingFilter,
  with seller and category loaded, in database order for the sort modes
  that need no scoring.
- fetch_median_samples() / fetch_median_prices(): available, branded
  listings published within the trailing window, aggregated into the
  brand+model median map.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

import structlog
from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from souqrank.config import ListingStatus, SortOrder, settings
from souqrank.engine.median import MedianSample, compute_median_prices, median_window_start
from souqrank.models.category import Category
from souqrank.models.listing import Listing
from souqrank.search.filters import ListingFilter

logger = structlog.get_logger(__name__)


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _apply_sort(stmt: Select, sort: SortOrder) -> Select:
    if sort == SortOrder.PRICE_LOW:
        return stmt.order_by(Listing.price_ils.asc(), Listing.id.asc())
    if sort == SortOrder.PRICE_HIGH:
        return stmt.order_by(Listing.price_ils.desc(), Listing.id.asc())
    if sort == SortOrder.POPULAR:
        return stmt.order_by(Listing.view_count.desc().nulls_last(), Listing.id.asc())
    # NEWEST, and BEST_MATCH before it is re-ordered by the ranker
    return stmt.order_by(Listing.created_at.desc(), Listing.id.asc())


def build_candidate_query(listing_filter: ListingFilter) -> Select:
    """Translate a ListingFilter into a SELECT over available listings."""
    stmt = select(Listing).where(Listing.status == ListingStatus.AVAILABLE.value)

    if listing_filter.query:
        pattern = _like_pattern(listing_filter.query)
        stmt = stmt.where(
            or_(
                Listing.title.ilike(pattern, escape="\\"),
                Listing.description.ilike(pattern, escape="\\"),
            )
        )
    if listing_filter.category_slug:
        stmt = stmt.join(Category, Listing.category_id == Category.id).where(
            Category.slug == listing_filter.category_slug
        )
    if listing_filter.region:
        stmt = stmt.where(Listing.region == listing_filter.region)
    if listing_filter.conditions:
        stmt = stmt.where(
            Listing.condition.in_([c.value for c in listing_filter.conditions])
        )

    stmt = stmt.where(
        Listing.price_ils >= listing_filter.min_price,
        Listing.price_ils <= listing_filter.max_price,
    )
    return _apply_sort(stmt, listing_filter.sort).limit(listing_filter.limit)


async def fetch_candidate_listings(
    session: AsyncSession,
    listing_filter: ListingFilter,
) -> Sequence[Listing]:
    """
    Fetch the candidate result set for one search request.

    Args:
        session: Async SQLAlchemy session.
        listing_filter: Predicates, ordering and limit.

    Returns:
        Listings with seller and category eagerly loaded.
    """
    result = await session.execute(build_candidate_query(listing_filter))
    listings = result.scalars().all()

    logger.info(
        "candidate_listings_fetched",
        count=len(listings),
        sort=listing_filter.sort.value,
        query=listing_filter.query,
        category=listing_filter.category_slug,
        region=listing_filter.region,
    )
    return listings


async def fetch_median_samples(
    session: AsyncSession,
    now: datetime,
    window_days: int | None = None,
) -> list[MedianSample]:
    """
    Prices of available, branded listings published within the window.

    Args:
        session: Async SQLAlchemy session.
        now: Reference time; the window ends here.
        window_days: Trailing window (default: settings.MEDIAN_WINDOW_DAYS).
    """
    cutoff = median_window_start(now, window_days)
    stmt = select(Listing.brand, Listing.model, Listing.price_ils).where(
        Listing.status == ListingStatus.AVAILABLE.value,
        Listing.brand.isnot(None),
        Listing.published_at >= cutoff,
    )
    result = await session.execute(stmt)
    samples = [
        MedianSample(brand=brand, model=model, price=float(price))
        for brand, model, price in result.all()
        if price is not None
    ]

    logger.debug(
        "median_samples_fetched",
        count=len(samples),
        cutoff=cutoff.isoformat(),
    )
    return samples


async def fetch_median_prices(
    session: AsyncSession,
    now: datetime,
    window_days: int | None = None,
    min_samples: int | None = None,
) -> dict[str, float]:
    """Median price per brand+model over the trailing window."""
    samples = await fetch_median_samples(session, now, window_days)
    medians = compute_median_prices(samples, min_samples=min_samples)

    logger.info(
        "median_prices_fetched",
        samples=len(samples),
        cohorts=len(medians),
        window_days=window_days if window_days is not None else settings.MEDIAN_WINDOW_DAYS,
    )
    return medians

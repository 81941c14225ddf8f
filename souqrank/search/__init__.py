from souqrank.search.best_match import (
    RankedListing,
    build_ranking_input,
    rank_listings,
    score_listings,
)
from souqrank.search.filters import ListingFilter
from souqrank.search.repository import (
    fetch_candidate_listings,
    fetch_median_prices,
    fetch_median_samples,
)
from souqrank.search.service import SearchService

__all__ = [
    "ListingFilter",
    "RankedListing",
    "SearchService",
    "build_ranking_input",
    "fetch_candidate_listings",
    "fetch_median_prices",
    "fetch_median_samples",
    "rank_listings",
    "score_listings",
]

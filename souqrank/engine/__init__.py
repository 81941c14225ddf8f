from souqrank.engine.engagement import calculate_engagement_score
from souqrank.engine.hot_deal import is_hot_deal
from souqrank.engine.median import (
    MedianSample,
    compute_median_prices,
    lookup_median_price,
    median_price_key,
)
from souqrank.engine.price_fairness import PriceFairness, calculate_price_fair_score
from souqrank.engine.quality import calculate_quality_score
from souqrank.engine.ranking import (
    RankingBadges,
    RankingComponents,
    RankingInput,
    RankingResult,
    calculate_listing_rank,
)
from souqrank.engine.recency import calculate_recency_score
from souqrank.engine.trust import calculate_trust_score

__all__ = [
    "MedianSample",
    "PriceFairness",
    "RankingBadges",
    "RankingComponents",
    "RankingInput",
    "RankingResult",
    "calculate_engagement_score",
    "calculate_listing_rank",
    "calculate_price_fair_score",
    "calculate_quality_score",
    "calculate_recency_score",
    "calculate_trust_score",
    "compute_median_prices",
    "is_hot_deal",
    "lookup_median_price",
    "median_price_key",
]

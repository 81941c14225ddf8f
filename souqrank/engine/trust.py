"""
SouqRank - Seller Trust Component

trust = clamp01((clamp(trust_score, 0, 100) + verified_bonus) / 100)

Verification adds a flat 10 points on the 0-100 scale before normalizing,
so a verified seller at 90 already reaches the ceiling.
"""

from __future__ import annotations

import structlog

from souqrank.config import DEFAULT_RANKING_POLICY, RankingPolicy

logger = structlog.get_logger(__name__)


def calculate_trust_score(
    trust_score: float,
    verified: bool,
    policy: RankingPolicy = DEFAULT_RANKING_POLICY,
) -> float:
    """
    Normalize a seller's 0-100 trust score to [0, 1].

    Args:
        trust_score: Seller reputation, clamped to [0, TRUST_SCALE_MAX].
        verified: Whether the seller passed verification.
        policy: Ranking weights and thresholds.

    Returns:
        Trust component in [0, 1].
    """
    base = min(policy.TRUST_SCALE_MAX, max(0.0, trust_score))
    bonus = policy.VERIFIED_BONUS if verified else 0.0
    trust = min(1.0, (base + bonus) / policy.TRUST_SCALE_MAX)

    logger.debug(
        "trust_scored",
        trust_score=trust_score,
        verified=verified,
        trust=trust,
    )
    return trust

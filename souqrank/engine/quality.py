"""
SouqRank - Listing Quality Component

Completeness score out of QUALITY_MAX_POINTS raw points:

| Signal                  | Points                               |
|:------------------------|:-------------------------------------|
| Title > 10 chars        | 1                                    |
| Description             | > 50 chars: 1, > 20 chars: 0.5       |
| Images                  | >= 3: 2, 2: 1.5, 1: 1                |
| Brand / model           | 0.5 each                             |
| Condition               | 0.5                                  |

The raw total is divided by QUALITY_MAX_POINTS and capped at 1.0.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from souqrank.config import DEFAULT_RANKING_POLICY, RankingPolicy

logger = structlog.get_logger(__name__)


def _image_points(image_count: int) -> float:
    if image_count >= 3:
        return 2.0
    if image_count == 2:
        return 1.5
    if image_count == 1:
        return 1.0
    return 0.0


def calculate_quality_score(
    title: str,
    description: str | None,
    images: Sequence[str] | None,
    brand: str | None,
    model: str | None,
    condition: str | None,
    policy: RankingPolicy = DEFAULT_RANKING_POLICY,
) -> float:
    """Score listing completeness in [0, 1]."""
    points = 0.0

    if len(title or "") > policy.TITLE_MIN_LENGTH:
        points += 1.0

    if description:
        if len(description) > policy.DESCRIPTION_FULL_LENGTH:
            points += 1.0
        elif len(description) > policy.DESCRIPTION_PARTIAL_LENGTH:
            points += 0.5

    points += _image_points(len(images or ()))

    if brand:
        points += policy.ATTRIBUTE_POINTS
    if model:
        points += policy.ATTRIBUTE_POINTS
    if condition:
        points += policy.ATTRIBUTE_POINTS

    quality = min(1.0, points / policy.QUALITY_MAX_POINTS)

    logger.debug(
        "quality_scored",
        raw_points=points,
        max_points=policy.QUALITY_MAX_POINTS,
        quality=quality,
    )
    return quality

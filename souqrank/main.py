"""
SouqRank — Command-line Entrypoint

Run via:
    python -m souqrank.main search --query iphone --sort best-match
    python -m souqrank.main search --category phones     (newest first)
    python -m souqrank.main score --file listing.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from souqrank.config import ItemCondition, SortOrder, settings
from souqrank.engine.ranking import RankingInput, RankingResult, calculate_listing_rank
from souqrank.search.best_match import RankedListing
from souqrank.search.filters import ListingFilter
from souqrank.search.service import SearchService


# ---------------------------------------------------------------------------
# Structlog Configuration
# ---------------------------------------------------------------------------


def _configure_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Set up structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        json_logs: JSON lines when True, human-readable console output otherwise.
    """
    # Logs go to stderr so stdout stays clean for results
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def result_to_dict(result: RankingResult | None) -> dict[str, Any] | None:
    if result is None:
        return None
    return {
        "score": result.score,
        "badges": result.badges._asdict(),
        "components": result.components._asdict(),
    }


def ranked_listing_to_dict(ranked: RankedListing) -> dict[str, Any]:
    listing = ranked.listing
    return {
        "id": listing.id,
        "title": listing.title,
        "price_ils": listing.price_ils,
        "ranking": result_to_dict(ranked.result),
    }


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def run_search(listing_filter: ListingFilter) -> list[RankedListing]:
    """Open the database, run one search, dispose the engine."""
    logger = structlog.get_logger(__name__)
    logger.info("database_engine_initializing")

    engine = create_async_engine(settings.DATABASE_URL, echo=False, pool_pre_ping=True)
    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    try:
        return await SearchService(session_factory).search(listing_filter)
    finally:
        await engine.dispose()


def score_file(path: Path) -> RankingResult:
    """Score a single RankingInput JSON document."""
    ranking_input = RankingInput.model_validate_json(path.read_text(encoding="utf-8"))
    return calculate_listing_rank(ranking_input)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="souqrank",
        description="Rank marketplace listings by trust, quality, recency, price and engagement.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Run a search against DATABASE_URL.")
    search.add_argument("--query", default=None, help="Substring of title or description.")
    search.add_argument("--category", default=None, help="Category slug.")
    search.add_argument("--region", default=None)
    search.add_argument(
        "--condition",
        action="append",
        default=[],
        choices=[c.value for c in ItemCondition],
        help="Repeat to allow several conditions.",
    )
    search.add_argument("--min-price", type=float, default=settings.SEARCH_DEFAULT_MIN_PRICE)
    search.add_argument("--max-price", type=float, default=settings.SEARCH_DEFAULT_MAX_PRICE)
    search.add_argument(
        "--sort",
        default=SortOrder.NEWEST.value,
        choices=[s.value for s in SortOrder],
    )
    search.add_argument("--limit", type=int, default=settings.SEARCH_RESULT_LIMIT)

    score = sub.add_parser("score", help="Score one listing from a JSON file.")
    score.add_argument("--file", type=Path, required=True)

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)
    logger = structlog.get_logger(__name__)

    if args.command == "score":
        try:
            result = score_file(args.file)
        except Exception as e:
            logger.error(
                "score_failed",
                file=str(args.file),
                error=str(e),
                error_type=type(e).__name__,
            )
            return 1
        print(json.dumps(result_to_dict(result)))
        return 0

    listing_filter = ListingFilter(
        query=args.query,
        category_slug=args.category,
        region=args.region,
        conditions=tuple(args.condition),
        min_price=args.min_price,
        max_price=args.max_price,
        sort=args.sort,
        limit=args.limit,
    )
    try:
        ranked = asyncio.run(run_search(listing_filter))
    except Exception as e:
        logger.error("search_failed", error=str(e), error_type=type(e).__name__)
        raise

    for item in ranked:
        print(json.dumps(ranked_listing_to_dict(item), ensure_ascii=False))
    logger.info("search_complete", results=len(ranked), sort=listing_filter.sort.value)
    return 0


# ---------------------------------------------------------------------------
# CLI Entry
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    sys.exit(main())

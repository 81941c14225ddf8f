"""
SouqRank — Shared pytest Fixtures & Configuration

Provides common fixtures for all test modules:
- A fixed reference time so age-based scores are reproducible
- A RankingInput factory with sensible defaults
- An in-memory async database (aiosqlite) with the marketplace tables
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, AsyncGenerator, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from souqrank.engine.ranking import RankingInput
from souqrank.models import Base

from factories import FIXED_NOW


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

pytest_plugins = ("pytest_asyncio",)


@pytest.fixture
def now() -> datetime:
    """Reference time shared by engine and search tests."""
    return FIXED_NOW


# ---------------------------------------------------------------------------
# Engine Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_input(now: datetime) -> Callable[..., RankingInput]:
    """
    Build a RankingInput; keyword overrides replace the defaults.

    Defaults describe a plain, unverified listing published at ``now`` with
    no engagement and no median.
    """

    def _make(**overrides: Any) -> RankingInput:
        fields: dict[str, Any] = {
            "seller_trust_score": 50,
            "seller_verified": False,
            "title": "Used phone",
            "description": None,
            "images": [],
            "brand": None,
            "model": None,
            "condition": None,
            "published_at": now,
            "created_at": None,
            "view_count": 0,
            "save_count": 0,
            "whatsapp_click_count": 0,
            "price": 1000,
            "median_price": None,
            "featured": False,
        }
        fields.update(overrides)
        return RankingInput(**fields)

    return _make


# ---------------------------------------------------------------------------
# Database Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """
    In-memory SQLite database with all marketplace tables.

    StaticPool keeps every session on the same connection, so all sessions
    see the same in-memory database. Fresh database per test.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield factory

    await engine.dispose()



"""
SouqRank — Search Filter Specification

An explicit, validated description of what the search page asked for. The
repository turns it into SQL predicates; nothing is built by concatenating
query strings.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from souqrank.config import ItemCondition, SortOrder, settings


class ListingFilter(BaseModel):
    """Search predicates, ordering and page size."""

    model_config = ConfigDict(frozen=True)

    query: str | None = Field(default=None, description="Substring of title or description")
    category_slug: str | None = None
    region: str | None = None
    conditions: tuple[ItemCondition, ...] = ()
    min_price: float = Field(default_factory=lambda: settings.SEARCH_DEFAULT_MIN_PRICE, ge=0)
    max_price: float = Field(default_factory=lambda: settings.SEARCH_DEFAULT_MAX_PRICE, ge=0)
    sort: SortOrder = SortOrder.NEWEST
    limit: int = Field(default_factory=lambda: settings.SEARCH_RESULT_LIMIT, ge=1)

    @field_validator("query", "category_slug", "region", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Empty form fields mean "no filter"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_price_range(self) -> ListingFilter:
        if self.min_price > self.max_price:
            raise ValueError("min_price must not exceed max_price")
        return self

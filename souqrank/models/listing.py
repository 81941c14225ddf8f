"""
SouqRank — Listing Model

One for-sale item. Content fields feed the quality component, the
engagement counters (incremented elsewhere by view/save/contact events) feed
the engagement component and hot-deal badge, and price_ils is compared
against the brand+model median.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BOOLEAN,
    INTEGER,
    JSON,
    TIMESTAMP,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from souqrank.config import ListingStatus
from souqrank.models.base import Base
from souqrank.models.category import Category
from souqrank.models.seller import Seller


class Listing(Base):
    """Marketplace listing as read by search and ranking."""

    __tablename__ = "listings"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    seller_id: Mapped[str] = mapped_column(ForeignKey("sellers.id"), nullable=False)
    category_id: Mapped[str | None] = mapped_column(
        ForeignKey("categories.id"), nullable=True
    )

    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    images: Mapped[list[str] | None] = mapped_column(
        JSON, nullable=True, comment="Ordered image paths"
    )
    brand: Mapped[str | None] = mapped_column(String, nullable=True)
    model: Mapped[str | None] = mapped_column(String, nullable=True)
    condition: Mapped[str | None] = mapped_column(
        String, nullable=True, comment="new | like_new | good | fair | poor"
    )
    region: Mapped[str] = mapped_column(String, nullable=False)

    price_ils: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=False, comment="Asking price (ILS)"
    )
    status: Mapped[str | None] = mapped_column(
        String, nullable=True, default=ListingStatus.AVAILABLE.value
    )
    featured: Mapped[bool | None] = mapped_column(BOOLEAN, nullable=True, default=False)

    view_count: Mapped[int | None] = mapped_column(INTEGER, nullable=True, default=0)
    save_count: Mapped[int | None] = mapped_column(INTEGER, nullable=True, default=0)
    whatsapp_click_count: Mapped[int | None] = mapped_column(
        INTEGER, nullable=True, default=0
    )

    published_at: Mapped[datetime | None] = mapped_column(
        TIMESTAMP(timezone=True), nullable=True
    )
    created_at: Mapped[datetime | None] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=True
    )

    seller: Mapped[Seller] = relationship(lazy="joined")
    category: Mapped[Category | None] = relationship(lazy="joined")

    __table_args__ = (
        Index("ix_listings_status_published", "status", "published_at"),
        Index("ix_listings_brand_model", "brand", "model"),
    )

    def __repr__(self) -> str:
        return (
            f"<Listing id={self.id!r} title={self.title!r} "
            f"price_ils={self.price_ils} status={self.status!r}>"
        )

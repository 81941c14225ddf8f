"""
SouqRank — Seller Model

The ranking reads two seller attributes: the 0-100 trust score (changed only
by moderation) and the verification flag.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BOOLEAN, TIMESTAMP, Float, String, func
from sqlalchemy.orm import Mapped, mapped_column

from souqrank.models.base import Base


class Seller(Base):
    """Marketplace seller (individual or shop)."""

    __tablename__ = "sellers"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    shop_name: Mapped[str | None] = mapped_column(String, nullable=True)
    region: Mapped[str] = mapped_column(String, nullable=False)
    trust_score: Mapped[float | None] = mapped_column(
        Float, nullable=True, comment="Seller reputation, 0-100"
    )
    verified: Mapped[bool | None] = mapped_column(
        BOOLEAN, nullable=True, default=False, comment="Passed seller verification"
    )
    whatsapp: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime | None] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=True
    )

    def __repr__(self) -> str:
        return (
            f"<Seller id={self.id!r} trust_score={self.trust_score} "
            f"verified={self.verified}>"
        )

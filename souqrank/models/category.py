"""
SouqRank — Category Model

Listing categories; search filters on the slug.
"""

from __future__ import annotations

from sqlalchemy import INTEGER, String
from sqlalchemy.orm import Mapped, mapped_column

from souqrank.models.base import Base


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name_ar: Mapped[str] = mapped_column(String, nullable=False)
    name_en: Mapped[str] = mapped_column(String, nullable=False)
    sort_order: Mapped[int | None] = mapped_column(INTEGER, nullable=True)

    def __repr__(self) -> str:
        return f"<Category slug={self.slug!r}>"

"""
Models package — export all SQLAlchemy models.
"""

from souqrank.models.base import Base
from souqrank.models.category import Category
from souqrank.models.listing import Listing
from souqrank.models.seller import Seller

__all__ = ["Base", "Category", "Listing", "Seller"]

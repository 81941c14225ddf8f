"""
SQLAlchemy 2.0 DeclarativeBase for SouqRank.

All read models inherit from this Base.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SouqRank database models."""
    pass

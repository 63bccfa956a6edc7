"""
Domain-split SQLAlchemy models with an aggregating namespace.

Exposes `Base`, `now_utc`, the shared status enum and all ORM classes.
"""

from .base import Base, ContentStatus, now_utc  # re-export

from .locations import State, City
from .audit import AuditLog

__all__ = [
    # base
    "Base",
    "ContentStatus",
    "now_utc",
    # locations
    "State",
    "City",
    # audit
    "AuditLog",
]

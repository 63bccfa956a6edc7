"""
Shared SQLAlchemy base and helpers.
"""
from enum import Enum
from sqlalchemy.orm import declarative_base
from datetime import datetime, UTC


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


class ContentStatus(str, Enum):
    """Publication status shared by location content (cities, states)."""
    PUBLISHED = "published"
    DRAFT = "draft"
    PENDING = "pending"

    @classmethod
    def values(cls):
        return [member.value for member in cls]


# Rendered into CHECK constraints on status columns
STATUS_CHECK_SQL = "status in ({})".format(", ".join(f"'{v}'" for v in ContentStatus.values()))

Base = declarative_base()

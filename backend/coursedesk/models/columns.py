"""
CourseDesk Backend — Shared Column Types
==========================================

What:  The UTC clock and the timestamp column type every model uses.
Why:   SQLite stores DATETIME without an offset, so a value read back would
       come out naive while the same value on a freshly created instance is
       aware. All timestamps are UTC-aware on both paths.
How:   UTCDateTime converts to UTC before binding and attaches UTC to naive
       values on load. PostgreSQL's timestamptz passes through unchanged
       apart from the conversion to UTC.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """UTC-aware copy of `value`; naive values are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """DateTime(timezone=True) that always hands back UTC-aware datetimes."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return as_utc(value)

    def process_result_value(self, value, dialect):
        return as_utc(value)

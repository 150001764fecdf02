"""Column Types — timezone-aware datetimes on every backend.

Invariants:
    - Values written are converted to UTC
    - Values read are always timezone-aware UTC, even where the driver drops tzinfo

Design Decisions:
    - TypeDecorator over per-call normalisation: SQLite returns naive datetimes,
      and core rules compare against an aware clock
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("naive datetime passed to a UTC column")
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: datetime | None, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

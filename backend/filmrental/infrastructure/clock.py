"""Wall Clock — production implementation of the core Clock protocol."""

from datetime import datetime, timezone


class SystemClock:
    """Current instant, timezone-aware UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

from datetime import UTC, datetime


class SystemClock:
    """Wall clock for adapters that need "now"; tests pass a fixed fake instead."""

    def now_utc(self) -> datetime:
        return datetime.now(UTC)

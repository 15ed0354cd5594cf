from datetime import datetime, timezone


class Clock:
    """Source of "now" for lifecycle checks and timestamps."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


system_clock = Clock()

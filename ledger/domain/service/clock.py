"""Clock port.

All invite timestamps are timezone-aware UTC. Services ask the clock instead
of calling ``datetime.now`` so that tests can pin and move time.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Source of the current UTC time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime."""
        pass


class SystemClock(Clock):
    """Wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock that only moves when told to. For testing."""

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs: float) -> datetime:
        """Move the clock forward, e.g. ``advance(hours=25)``."""
        self._now = self._now + timedelta(**kwargs)
        return self._now

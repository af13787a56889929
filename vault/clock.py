"""Time source abstraction so timestamps and expiry checks can be driven by tests."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone


class Clock(ABC):
    """Returns the current time as an aware UTC datetime."""

    @abstractmethod
    def now(self) -> datetime:
        pass


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)

"""
Single source of "now" for the date/time code.

Everything that needs the current instant takes an optional ``clock`` and
reads it exactly once per call, so one call never mixes two different
notions of the current time. Tests pass a ``FixedClock``.
"""

from datetime import datetime, tzinfo
from typing import Optional


class Clock:
    """Returns the current instant as an aware datetime in a given zone."""

    def now(self, tz: tzinfo) -> datetime:
        raise NotImplementedError


class SystemClock(Clock):
    def now(self, tz: tzinfo) -> datetime:
        return datetime.now(tz)


class FixedClock(Clock):
    """
    Clock pinned to one instant.

    A naive ``instant`` is read as wall-clock time in whichever zone asks for
    it, so ``FixedClock(datetime(2025, 1, 15, 10, 0))`` means 10:00 local
    time everywhere. An aware ``instant`` is converted into the asking zone.
    """

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self, tz: tzinfo) -> datetime:
        if self.instant.tzinfo is None:
            if hasattr(tz, "localize"):
                return tz.localize(self.instant)
            return self.instant.replace(tzinfo=tz)
        return self.instant.astimezone(tz)


system_clock = SystemClock()


def resolve_clock(clock: Optional[Clock] = None) -> Clock:
    return clock if clock is not None else system_clock

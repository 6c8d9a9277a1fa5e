# medhelper/core/clock.py
from datetime import datetime
from typing import Optional


class Clock:
    """Wall-clock source. Everything time-dependent reads through one of these."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> str:
        return self.now().strftime("%Y-%m-%d")


class FixedClock(Clock):
    def __init__(self, at: datetime):
        self.at = at

    def now(self) -> datetime:
        return self.at

    def set(self, at: datetime) -> None:
        self.at = at


_SYSTEM_CLOCK = Clock()

def get_clock() -> Clock:
    return _SYSTEM_CLOCK

def resolve(clock: Optional[Clock]) -> Clock:
    return clock if clock is not None else _SYSTEM_CLOCK

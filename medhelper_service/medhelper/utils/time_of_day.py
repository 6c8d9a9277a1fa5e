# medhelper/utils/time_of_day.py
from __future__ import annotations

import re
from typing import NamedTuple, Optional, Tuple, Union

from medhelper.core.clock import Clock, resolve

TimeFormat = str  # "12h" | "24h"

_STORAGE_RE = re.compile(r"([0-9]{2}):([0-9]{2})")
_DISPLAY_24H_RE = re.compile(r"([0-9]{1,2}):([0-9]{2})")
_DISPLAY_12H_RE = re.compile(r"([0-9]{1,2}):([0-9]{2}) *([AaPp][Mm])")


class InvalidTimeFormat(ValueError):
    pass


class TimeOfDay(NamedTuple):
    hour: int
    minute: int

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    @property
    def minutes(self) -> int:
        return self.hour * 60 + self.minute


TimeLike = Union[str, TimeOfDay]


def _checked(hour: int, minute: int, raw: str) -> TimeOfDay:
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidTimeFormat(f"Time out of range: {raw!r}")
    return TimeOfDay(hour, minute)


def parse_time(value: TimeLike) -> TimeOfDay:
    """
    Parse a stored 24-hour "HH:MM" value.
    Raises InvalidTimeFormat instead of falling back to a default.
    """
    if isinstance(value, TimeOfDay):
        return value
    m = _STORAGE_RE.fullmatch(value) if isinstance(value, str) else None
    if not m:
        raise InvalidTimeFormat(f"Expected HH:MM, got {value!r}")
    return _checked(int(m.group(1)), int(m.group(2)), value)


def normalize_time(value: TimeLike) -> str:
    return str(parse_time(value))


def _to_12h(t: TimeOfDay) -> str:
    h12 = t.hour % 12 or 12
    suffix = "AM" if t.hour < 12 else "PM"
    return f"{h12}:{t.minute:02d} {suffix}"


def format_for_display(value: TimeLike, time_format: TimeFormat) -> str:
    """Lenient: unparsable input is handed back unchanged."""
    if not value:
        return ""
    try:
        t = parse_time(value)
    except InvalidTimeFormat:
        return str(value)
    if time_format == "12h":
        return _to_12h(t)
    return str(t)


def parse_display_to_storage(value: str, time_format: TimeFormat) -> TimeOfDay:
    raw = (value or "").strip()
    if time_format == "12h":
        m = _DISPLAY_12H_RE.fullmatch(raw)
        if not m:
            raise InvalidTimeFormat(f"Expected h:MM AM/PM, got {value!r}")
        h12, minute = int(m.group(1)), int(m.group(2))
        if not 1 <= h12 <= 12:
            raise InvalidTimeFormat(f"Hour out of range: {value!r}")
        hour = h12 % 12 + (12 if m.group(3).upper() == "PM" else 0)
        return _checked(hour, minute, value)

    m = _DISPLAY_24H_RE.fullmatch(raw)
    if not m:
        raise InvalidTimeFormat(f"Expected HH:MM, got {value!r}")
    return _checked(int(m.group(1)), int(m.group(2)), value)


def is_time_string_valid(value: str, time_format: TimeFormat) -> bool:
    try:
        parse_display_to_storage(value, time_format)
        return True
    except InvalidTimeFormat:
        return False


def compare(a: TimeLike, b: TimeLike) -> int:
    ta, tb = parse_time(a), parse_time(b)
    if ta == tb:
        return 0
    return -1 if ta < tb else 1


def sort_key(value: TimeLike) -> Tuple[int, int]:
    t = parse_time(value)
    return (t.hour, t.minute)


def now(clock: Optional[Clock] = None) -> TimeOfDay:
    dt = resolve(clock).now()
    return TimeOfDay(dt.hour, dt.minute)


def time_until(scheduled: TimeLike, current: TimeLike) -> Tuple[int, int]:
    """(hours, minutes) until the next occurrence of `scheduled`, wrapping past midnight."""
    s, c = parse_time(scheduled).minutes, parse_time(current).minutes
    if s < c:
        s += 24 * 60
    diff = s - c
    return diff // 60, diff % 60

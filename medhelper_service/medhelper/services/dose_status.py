# medhelper/services/dose_status.py
from typing import Literal

from medhelper.utils.time_of_day import TimeLike, parse_time

LiveStatus = Literal["upcoming", "current", "missed"]


def classify(scheduled: TimeLike, current: TimeLike) -> LiveStatus:
    """
    Live status of an unlogged dose.
    The missed boundary is an hour-difference-of-2 rule with a minute
    tie-break, not a rolling 120-minute window. No midnight handling.
    """
    s = parse_time(scheduled)
    c = parse_time(current)

    if s.hour < c.hour - 2 or (s.hour == c.hour - 2 and s.minute < c.minute):
        return "missed"

    if s.hour > c.hour or (s.hour == c.hour and s.minute > c.minute):
        return "upcoming"

    return "current"

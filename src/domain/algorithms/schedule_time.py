from __future__ import annotations

import re

from src.domain.exceptions import MalformedScheduleError

SECONDS_PER_DAY = 24 * 3600

_TIME_RE = re.compile(r"^(\d+):(\d{1,2})(?::(\d{1,2}))?$")


def parse_schedule_time(raw: str) -> int:
    """Parse a GTFS "H:M[:S]" time into seconds since service-day midnight.

    Hours may exceed 23 (service past midnight). Anything else that does not
    match raises MalformedScheduleError instead of producing a bogus number.
    """

    value = raw.strip() if isinstance(raw, str) else ""
    match = _TIME_RE.match(value)
    if match is None:
        raise MalformedScheduleError(f"Invalid arrival time: {raw!r}")

    hh, mm, ss = match.groups()
    minutes = int(mm)
    seconds = int(ss or 0)
    if minutes > 59 or seconds > 59:
        raise MalformedScheduleError(f"Invalid arrival time: {raw!r}")
    return int(hh) * 3600 + minutes * 60 + seconds


def minutes_between_seconds(start_s: int, end_s: int) -> int:
    diff = end_s - start_s
    if diff < 0:
        # Crossed midnight; bring it back into a single day.
        diff %= SECONDS_PER_DAY
    return int(diff / 60 + 0.5)


def minutes_between(start: str, end: str) -> int:
    """Whole minutes from `start` to `end`, wrapping around midnight."""

    return minutes_between_seconds(parse_schedule_time(start), parse_schedule_time(end))

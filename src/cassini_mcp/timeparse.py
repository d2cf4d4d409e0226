"""Timestamp parsing for observation time-range queries.

Two notations are accepted:

* **Calendar** — ISO 8601 (``2005-01-01``, ``2005-01-01T12:30:00``,
  ``2005-01-01T12:30:00Z``) and slash-separated dates (``2005/01/01``).
* **Day-of-year** — ``YYYY-DDDTHH:MM:SS`` as used by the mission master plan
  (``2005-001T00:00:00`` is the first instant of 2005). The clock time may
  omit zero padding (``2005-010T9:05:00``); one that cannot be read at all
  falls back to midnight of that day.

Both range boundaries and every observation's own start time go through
:func:`parse_time`, so both sides of a comparison are read the same way.
All results are naive datetimes in UTC.
"""

from __future__ import annotations

import re
from datetime import datetime, time, timedelta, timezone

# H:M, H:M:S or H:M:S.f without zero padding, optionally suffixed with Z.
_TIME_OF_DAY = re.compile(r"(\d{1,2}):(\d{1,2})(?::(\d{1,2})(?:\.(\d{1,7}))?)?[Zz]?$")

_EXTRA_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%dT%H:%M:%S",
)


class TimeFormatError(ValueError):
    """A timestamp matches neither accepted notation."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Unable to parse time string: {value}")


def parse_time(value: str) -> datetime:
    """Parse *value* into a naive UTC datetime.

    The calendar notation is tried first; the day-of-year notation is only
    considered when the string has its shape (``value[4] == "-"`` and
    ``value[8] == "T"``).

    Raises:
        TimeFormatError: If neither notation parses.
    """
    text = value.strip()

    parsed = _parse_calendar(text)
    if parsed is not None:
        return _to_utc(parsed)

    if _looks_like_day_of_year(text):
        parsed = _parse_day_of_year(text)
        if parsed is not None:
            return _to_utc(parsed)

    raise TimeFormatError(value)


def try_parse_time(value: str | None) -> datetime | None:
    """Like :func:`parse_time` but return ``None`` on any failure."""
    if not value:
        return None
    try:
        return parse_time(value)
    except TimeFormatError:
        return None


def _parse_calendar(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _EXTRA_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _looks_like_day_of_year(text: str) -> bool:
    return len(text) >= 11 and text[4] == "-" and text[8] == "T"


def _parse_day_of_year(text: str) -> datetime | None:
    year_part, day_part, time_part = text[:4], text[5:8], text[9:]
    if not (year_part.isdigit() and day_part.isdigit()):
        return None

    day_of_year = int(day_part)
    if not 1 <= day_of_year <= 366:
        return None

    try:
        january_first = datetime(int(year_part), 1, 1)
    except ValueError:
        return None
    # 366 in a non-leap year rolls over to January 1st of the next year.
    day = january_first + timedelta(days=day_of_year - 1)
    time_of_day = _parse_time_of_day(time_part)
    if time_of_day is None:
        # An unreadable time part leaves the date at midnight.
        time_of_day = time()
    return datetime.combine(day.date(), time_of_day)


def _parse_time_of_day(text: str) -> time | None:
    match = _TIME_OF_DAY.match(text.strip())
    if match is None:
        return None
    hours, minutes, seconds, fraction = match.groups()
    microseconds = int((fraction or "").ljust(6, "0")[:6])
    try:
        return time(int(hours), int(minutes), int(seconds or 0), microseconds)
    except ValueError:
        return None


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)

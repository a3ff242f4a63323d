"""
Date Resolver

Parses the loosely formatted dates found on proposal records, labels event
date ranges and classifies dates relative to "now".
"""

import re
from datetime import date, datetime, time
from typing import Callable

from dateutil import parser as date_parser

MONTH_NAMES = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)

# YYYY-MM-DD prefix; built field-by-field so no timezone shift can occur
_ISO_DATE_PREFIX = re.compile(r'^(\d{4})-(\d{2})-(\d{2})')

# Two unrelated fill-ins for fields a free-form date leaves out
_FALLBACK_DEFAULTS = (datetime(2000, 1, 1), datetime(2004, 12, 28))


def parse_date(value) -> date | None:
    """
    Resolve a date-like value to a calendar date.

    Returns None for anything that does not name a real day, including
    partial dates such as "March" or "June 1" that leave out a field.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return _calendar_day(value)

    if isinstance(value, date):
        return value

    if not isinstance(value, str) or not value.strip():
        return None

    match = _ISO_DATE_PREFIX.match(value)
    if match:
        year, month, day = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None

    try:
        candidates = [date_parser.parse(value, default=default) for default in _FALLBACK_DEFAULTS]
    except (ValueError, OverflowError):
        return None

    resolved = {_calendar_day(parsed) for parsed in candidates}
    # "March" or "12" names no single day: the fill-ins show through
    if len(resolved) != 1:
        return None
    return resolved.pop()


def _calendar_day(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.date()


def day_span(start, end) -> int | None:
    """Inclusive number of days from start to end, or None if either is missing."""
    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date is None or end_date is None:
        return None
    return (end_date - start_date).days + 1


def format_date_range(start, end) -> str:
    """
    Human label for an event's dates.

        March 5, 2025            same day
        March 5–7, 2025          same month
        March 30 – April 2, 2025 different months
    """
    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date is None or end_date is None:
        return ''

    start_month = MONTH_NAMES[start_date.month - 1]
    end_month = MONTH_NAMES[end_date.month - 1]
    year = start_date.year

    if start_month == end_month and start_date.day == end_date.day:
        return f"{start_month} {start_date.day}, {year}"
    if start_month == end_month:
        return f"{start_month} {start_date.day}–{end_date.day}, {year}"
    return f"{start_month} {start_date.day} – {end_month} {end_date.day}, {year}"


class DateResolver:
    """Date helpers bound to a clock, so past/future checks are testable."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock

    def is_future(self, value) -> bool:
        """True when the date's midnight is later than now."""
        midnight = self._midnight(value)
        if midnight is None:
            return False
        return midnight > self._now()

    def is_past(self, value) -> bool:
        """True when the date's midnight is earlier than now."""
        midnight = self._midnight(value)
        if midnight is None:
            return False
        return midnight < self._now()

    def _midnight(self, value) -> datetime | None:
        resolved = parse_date(value)
        if resolved is None:
            return None
        return datetime.combine(resolved, time.min)

    def _now(self) -> datetime:
        now = self.clock()
        # Local-midnight comparisons are naive
        if now.tzinfo is not None:
            now = now.astimezone().replace(tzinfo=None)
        return now


_default_resolver = DateResolver()


def is_future(value) -> bool:
    return _default_resolver.is_future(value)


def is_past(value) -> bool:
    return _default_resolver.is_past(value)

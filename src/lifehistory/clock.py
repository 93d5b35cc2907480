"""
Time, date and identifier collaborators.

The builder and mover take a clock and an id factory as arguments so both stay
pure; the defaults below are the only places that read wall time or randomness.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import date, datetime

from dateutil import parser as date_parser

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]

PARSE_DEFAULT = datetime(2000, 1, 1)


def system_clock() -> datetime:
    """Current local time with its UTC offset."""
    return datetime.now().astimezone()


def fixed_clock(moment: datetime) -> Clock:
    """Clock that always returns ``moment``."""

    def clock() -> datetime:
        return moment

    return clock


def uuid_factory() -> str:
    return str(uuid.uuid4())


def sequential_ids(prefix: str = "event") -> IdFactory:
    """Id factory yielding ``prefix-1``, ``prefix-2``, ..."""
    counter = 0

    def next_id() -> str:
        nonlocal counter
        counter += 1
        return f"{prefix}-{counter}"

    return next_id


def timestamp(clock: Clock) -> str:
    """ISO-8601 timestamp with second precision, e.g. 2024-03-01T10:15:00+01:00."""
    return clock().isoformat(timespec="seconds")


def parse_date(value: str | date) -> date:
    """
    Parse a date string leniently.

    Parts the string leaves out fall back to January 1st, so "2000" is
    2000-01-01 and "2000-06" is 2000-06-01 regardless of today's date.

    Raises whatever the parser raises for unparseable input (ValueError or
    OverflowError); callers do not validate beforehand.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.parse(value, default=PARSE_DEFAULT).date()


def month_id(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def mid_month(year: int, month: int) -> str:
    """The 15th of the month as YYYY-MM-DD."""
    return date(year, month, 15).isoformat()


def mid_month_from_id(value: str) -> str:
    """The 15th of the month named by a "YYYY-MM" id."""
    return datetime.strptime(f"{value}-15", "%Y-%m-%d").date().isoformat()

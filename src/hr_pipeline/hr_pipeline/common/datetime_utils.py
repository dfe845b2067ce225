from __future__ import annotations

import calendar
from datetime import date, datetime, time
from typing import Optional

from ..core.constants import DATE_FORMAT, PERIOD_FORMAT, TIME_FORMAT

# Accepted spellings for dates coming from spreadsheets.
_DATE_INPUT_FORMATS = (DATE_FORMAT, "%Y/%m/%d", "%d/%m/%Y")
_TIME_INPUT_FORMATS = ("%H:%M", "%H:%M:%S")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_flexible_date(value: str) -> date:
    """Parse a date in any of the accepted input formats.

    Raises ValueError when none of them matches.
    """
    for fmt in _DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"unrecognised date {value!r}")


def parse_clock_time(value: str) -> time:
    for fmt in _TIME_INPUT_FORMATS:
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"unrecognised time {value!r}")


def parse_period(value: str) -> tuple[int, int]:
    """Parse YYYY-MM into (year, month)."""
    parsed = datetime.strptime(value, PERIOD_FORMAT)
    return parsed.year, parsed.month


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def format_date(value: Optional[date]) -> str:
    return value.strftime(DATE_FORMAT) if value else ""


def format_time(value: Optional[time]) -> str:
    return value.strftime(TIME_FORMAT) if value else ""


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock it easier.
    """
    return datetime.now()

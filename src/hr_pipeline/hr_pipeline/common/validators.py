from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.constants import MAX_REPORT_YEAR, MIN_REPORT_YEAR
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_period


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date(value: Optional[str], field_name: str) -> date:
    raw = require_non_empty(value, field_name)
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def require_date_range(start: Optional[str], end: Optional[str]) -> tuple[date, date]:
    start_date = require_date(start, "start_date")
    end_date = require_date(end, "end_date")
    if end_date < start_date:
        raise ValidationError("end_date must be on or after start_date")
    return start_date, end_date


def require_period(value: Optional[str], field_name: str = "month") -> tuple[int, int]:
    raw = require_non_empty(value, field_name)
    try:
        return parse_period(raw)
    except ValueError:
        raise ValidationError(f"{field_name} must be in YYYY-MM format")


def require_year(value) -> int:
    if value in (None, ""):
        raise ValidationError("year is required")
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError("year must be an integer")
    if year < MIN_REPORT_YEAR or year > MAX_REPORT_YEAR:
        raise ValidationError(f"year must be between {MIN_REPORT_YEAR} and {MAX_REPORT_YEAR}")
    return year


def optional_month(value) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        month = int(value)
    except (TypeError, ValueError):
        raise ValidationError("month must be an integer")
    if month < 1 or month > 12:
        raise ValidationError("month must be between 1 and 12")
    return month


def optional_int(value, field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class HolidayDraft:
    title: str
    holiday_date: date
    is_optional: bool = False


@dataclass(frozen=True)
class CompanyHoliday:
    holiday_id: int
    title: str
    holiday_date: date
    is_optional: bool = False

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import CompanyHoliday, HolidayDraft


class HolidayRepository(Protocol):
    def get_by_date(self, holiday_date: date) -> Optional[CompanyHoliday]:
        raise NotImplementedError

    def upsert_by_date(self, draft: HolidayDraft) -> int:
        """holiday_date is the natural key: re-import overwrites title/is_optional."""

        raise NotImplementedError

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, Protocol

from ..attendance.model import WorkLogDraft
from ..common.datetime_utils import now_local, parse_clock_time, parse_flexible_date
from ..core.enums import EmploymentStatus, WorkLogStatus
from ..core.exceptions import RowError
from ..holidays.model import HolidayDraft
from ..staff.model import StaffMember, StaffRecord


class StaffLookup(Protocol):
    def get_by_staff_code(self, staff_code: str) -> Optional[StaffMember]:
        raise NotImplementedError


def _text(fields: dict, name: str) -> str:
    return (fields.get(name) or "").strip()


def _optional_text(fields: dict, name: str) -> Optional[str]:
    return _text(fields, name) or None


def _required_text(fields: dict, name: str) -> str:
    value = _text(fields, name)
    if not value:
        raise RowError(f"Missing required field '{name}'")
    return value


def _number(fields: dict, name: str) -> Decimal:
    raw = _text(fields, name).replace(",", "")
    if not raw:
        return Decimal(0)
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise RowError(f"Invalid number for {name}: {raw}")


def _date(fields: dict, name: str) -> Optional[date]:
    raw = _text(fields, name)
    if not raw:
        return None
    try:
        return parse_flexible_date(raw)
    except ValueError:
        raise RowError(f"Invalid date for {name}: {raw}")


def _time(fields: dict, name: str) -> Optional[time]:
    raw = _text(fields, name)
    if not raw:
        return None
    try:
        return parse_clock_time(raw)
    except ValueError:
        raise RowError(f"Invalid time for {name}: {raw}")


class RecordMapper:
    """Turns parsed field maps into domain drafts.

    Defaults: blank numbers -> 0, blank dates -> None (hire_date -> today),
    blank employment_status -> active, blank attendance status -> present.
    """

    def __init__(self, staff: StaffLookup, *, clock: Callable[[], datetime] = now_local):
        self._staff = staff
        self._clock = clock

    def to_staff(self, fields: dict) -> StaffRecord:
        status_raw = _text(fields, "employment_status").lower()
        try:
            status = EmploymentStatus(status_raw) if status_raw else EmploymentStatus.ACTIVE
        except ValueError:
            raise RowError(f"Invalid employment_status: {status_raw}")

        return StaffRecord(
            first_name=_text(fields, "first_name"),
            last_name=_text(fields, "last_name"),
            personal_email=_optional_text(fields, "personal_email"),
            phone_number=_optional_text(fields, "phone_number"),
            date_of_birth=_date(fields, "date_of_birth"),
            gender=_optional_text(fields, "gender"),
            hire_date=_date(fields, "hire_date") or self._clock().date(),
            base_salary=_number(fields, "base_salary"),
            employment_status=status,
        )

    def to_work_log(self, fields: dict) -> WorkLogDraft:
        staff_code = _required_text(fields, "staff_code")
        staff = self._staff.get_by_staff_code(staff_code)
        if not staff:
            raise RowError(f"Staff not found: {staff_code}")

        log_date = _date(fields, "log_date")
        if log_date is None:
            raise RowError("Missing required field 'log_date'")

        status_raw = _text(fields, "status").lower()
        try:
            status = WorkLogStatus(status_raw) if status_raw else WorkLogStatus.PRESENT
        except ValueError:
            raise RowError(f"Invalid status: {status_raw}")

        return WorkLogDraft(
            staff_member_id=staff.staff_member_id,
            log_date=log_date,
            status=status,
            clock_in=_time(fields, "clock_in"),
            clock_out=_time(fields, "clock_out"),
        )

    def to_holiday(self, fields: dict) -> HolidayDraft:
        holiday_date = _date(fields, "holiday_date")
        if holiday_date is None:
            raise RowError("Missing required field 'holiday_date'")

        return HolidayDraft(
            title=_required_text(fields, "title"),
            holiday_date=holiday_date,
            is_optional=_text(fields, "is_optional").lower() == "yes",
        )

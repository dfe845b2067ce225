from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..attendance.repository import WorkLogRepository
from ..core.enums import ImportKind
from ..core.exceptions import ValidationError
from ..holidays.repository import HolidayRepository
from ..staff.repository import StaffRepository
from .mapper import RecordMapper


@dataclass(frozen=True)
class ImportTargets:
    """Repositories an import run may write to."""

    staff: StaffRepository
    work_logs: WorkLogRepository
    holidays: HolidayRepository


@dataclass(frozen=True)
class KindSpec:
    columns: tuple[str, ...]
    sample: tuple[str, ...]
    required: tuple[str, ...]
    store: Callable[[RecordMapper, ImportTargets, dict], int]

    def template(self) -> dict:
        return {"columns": list(self.columns), "sample": [list(self.sample)]}


def _store_staff(mapper: RecordMapper, targets: ImportTargets, fields: dict) -> int:
    # Plain insert: re-importing the same file creates new staff rows.
    return targets.staff.create(mapper.to_staff(fields))


def _store_work_log(mapper: RecordMapper, targets: ImportTargets, fields: dict) -> int:
    return targets.work_logs.upsert(mapper.to_work_log(fields))


def _store_holiday(mapper: RecordMapper, targets: ImportTargets, fields: dict) -> int:
    return targets.holidays.upsert_by_date(mapper.to_holiday(fields))


KIND_SPECS: dict[ImportKind, KindSpec] = {
    ImportKind.STAFF_MEMBERS: KindSpec(
        columns=(
            "first_name",
            "last_name",
            "personal_email",
            "phone_number",
            "date_of_birth",
            "gender",
            "hire_date",
            "base_salary",
            "employment_status",
            "office_location",
            "division",
            "job_title",
        ),
        sample=(
            "John",
            "Doe",
            "john@example.com",
            "1234567890",
            "1990-01-15",
            "male",
            "2024-01-01",
            "50000",
            "active",
            "Head Office",
            "Engineering",
            "Developer",
        ),
        required=(),
        store=_store_staff,
    ),
    ImportKind.WORK_LOGS: KindSpec(
        columns=("staff_code", "log_date", "status", "clock_in", "clock_out"),
        sample=("EMP001", "2024-12-16", "present", "09:00", "18:00"),
        required=("staff_code", "log_date"),
        store=_store_work_log,
    ),
    ImportKind.COMPANY_HOLIDAYS: KindSpec(
        columns=("title", "holiday_date", "is_optional"),
        sample=("New Year", "2025-01-01", "no"),
        required=("title", "holiday_date"),
        store=_store_holiday,
    ),
}

_missing = [k.value for k in ImportKind if k not in KIND_SPECS]
if _missing:
    raise RuntimeError(f"Import kinds without a spec: {_missing}")


def parse_kind(value: str) -> ImportKind:
    try:
        return ImportKind((value or "").strip())
    except ValueError:
        raise ValidationError("Unknown import type")


def spec_for(kind: ImportKind) -> KindSpec:
    return KIND_SPECS[kind]

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import WorkLogStatus


@dataclass(frozen=True)
class WorkLogDraft:
    """Mapped import row: staff code already resolved to a staff id."""

    staff_member_id: int
    log_date: date
    status: WorkLogStatus
    clock_in: Optional[time]
    clock_out: Optional[time]


@dataclass(frozen=True)
class WorkLog:
    """Domain entity: one attendance day of one staff member."""

    work_log_id: int
    staff_member_id: int
    log_date: date
    status: WorkLogStatus
    clock_in: Optional[time] = None
    clock_out: Optional[time] = None
    late_minutes: int = 0
    early_leave_minutes: int = 0
    overtime_minutes: int = 0


@dataclass(frozen=True)
class WorkLogExportRow:
    """Read-model for CSV export (joined with the staff member)."""

    staff_code: str
    staff_name: str
    log_date: date
    status: WorkLogStatus
    clock_in: Optional[time]
    clock_out: Optional[time]
    late_minutes: int
    overtime_minutes: int
    early_leave_minutes: int

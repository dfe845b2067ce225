from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterator, Optional

from ..attendance.repository import WorkLogRepository
from ..common.datetime_utils import now_local
from ..common.validators import optional_month, require_date_range, require_period, require_year
from ..core.enums import ApprovalStatus, EmploymentStatus, ExportKind
from ..core.exceptions import ValidationError
from ..leave.repository import LeaveRepository
from ..payroll.repository import SalarySlipRepository
from ..staff.repository import StaffRepository
from .writer import CsvExportWriter

logger = logging.getLogger(__name__)

ExportResult = tuple[str, Iterator[str]]


def _parse_enum(enum_cls, value: Optional[str], field_name: str):
    if not value:
        return None
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value}")


class ExportService:
    """Validates export filters, loads records and hands them to the CSV writer.

    Every method returns (filename, chunks); chunks is a lazy iterator of CSV text.
    """

    def __init__(
        self,
        *,
        staff: StaffRepository,
        work_logs: WorkLogRepository,
        leave: LeaveRepository,
        salary_slips: SalarySlipRepository,
        writer: Optional[CsvExportWriter] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._staff = staff
        self._work_logs = work_logs
        self._leave = leave
        self._salary_slips = salary_slips
        self._writer = writer or CsvExportWriter()
        self._clock = clock

    def export_staff(
        self,
        *,
        office_location_id: Optional[int] = None,
        division_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> ExportResult:
        employment_status = _parse_enum(EmploymentStatus, status, "status")
        members = self._staff.list_members(
            office_location_id=office_location_id,
            division_id=division_id,
            employment_status=employment_status,
        )
        filename = f"staff_members_{self._clock().strftime('%Y-%m-%d')}.csv"
        logger.info("Exporting %d staff members", len(members))
        return filename, self._writer.stream(ExportKind.STAFF, members)

    def export_attendance(
        self,
        *,
        start_date: Optional[str],
        end_date: Optional[str],
        staff_member_id: Optional[int] = None,
    ) -> ExportResult:
        start, end = require_date_range(start_date, end_date)
        rows = self._work_logs.get_export_rows(start_date=start, end_date=end, staff_member_id=staff_member_id)
        filename = f"attendance_{start.isoformat()}_to_{end.isoformat()}.csv"
        logger.info("Exporting %d work logs for %s..%s", len(rows), start, end)
        return filename, self._writer.stream(ExportKind.ATTENDANCE, rows)

    def export_leaves(self, *, year, month=None, status: Optional[str] = None) -> ExportResult:
        year = require_year(year)
        month_no = optional_month(month)
        approval_status = _parse_enum(ApprovalStatus, status, "status")
        requests = self._leave.list_requests(year=year, month=month_no, approval_status=approval_status)
        filename = f"leaves_{year}.csv"
        logger.info("Exporting %d leave requests for %s", len(requests), year)
        return filename, self._writer.stream(ExportKind.LEAVES, requests)

    def export_payroll(self, *, salary_period: Optional[str]) -> ExportResult:
        year, month_no = require_period(salary_period, "salary_period")
        period = f"{year:04d}-{month_no:02d}"
        slips = self._salary_slips.list_for_period(period)
        logger.info("Exporting %d salary slips for %s", len(slips), period)
        return f"payroll_{period}.csv", self._writer.stream(ExportKind.PAYROLL, slips)

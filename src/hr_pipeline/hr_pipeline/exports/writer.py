"""CSV rendering for bulk exports.

Each export kind has a fixed ordered column set. Rows are rendered one at a
time so a response can stream them without holding the whole file.
"""

from __future__ import annotations

import csv
import io
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Iterable, Iterator

from ..common.datetime_utils import format_date, format_time
from ..core.enums import ExportKind

Column = tuple[str, Callable[[Any], Any]]


def _attr(name: str) -> Callable[[Any], Any]:
    return lambda record: getattr(record, name)


STAFF_COLUMNS: list[Column] = [
    ("Staff Code", _attr("staff_code")),
    ("First Name", _attr("first_name")),
    ("Last Name", _attr("last_name")),
    ("Email", _attr("personal_email")),
    ("Phone", _attr("phone_number")),
    ("Date of Birth", _attr("date_of_birth")),
    ("Gender", _attr("gender")),
    ("Hire Date", _attr("hire_date")),
    ("Base Salary", _attr("base_salary")),
    ("Status", _attr("employment_status")),
    ("Office Location", _attr("office_location_name")),
    ("Division", _attr("division_name")),
    ("Job Title", _attr("job_title_name")),
]

ATTENDANCE_COLUMNS: list[Column] = [
    ("Staff Code", _attr("staff_code")),
    ("Staff Name", _attr("staff_name")),
    ("Date", _attr("log_date")),
    ("Status", _attr("status")),
    ("Clock In", _attr("clock_in")),
    ("Clock Out", _attr("clock_out")),
    ("Late (mins)", _attr("late_minutes")),
    ("Overtime (mins)", _attr("overtime_minutes")),
    ("Early Leave (mins)", _attr("early_leave_minutes")),
]

LEAVE_COLUMNS: list[Column] = [
    ("Staff Code", _attr("staff_code")),
    ("Staff Name", _attr("staff_name")),
    ("Category", _attr("category_title")),
    ("Start Date", _attr("start_date")),
    ("End Date", _attr("end_date")),
    ("Days", _attr("total_days")),
    ("Status", _attr("approval_status")),
    ("Reason", _attr("reason")),
]

PAYROLL_COLUMNS: list[Column] = [
    ("Slip Reference", _attr("slip_reference")),
    ("Staff Code", _attr("staff_code")),
    ("Staff Name", _attr("staff_name")),
    ("Division", _attr("division_name")),
    ("Basic Salary", _attr("basic_salary")),
    ("Total Earnings", _attr("total_earnings")),
    ("Total Deductions", _attr("total_deductions")),
    ("Net Payable", _attr("net_payable")),
    ("Status", _attr("status")),
]

EXPORT_COLUMNS: dict[ExportKind, list[Column]] = {
    ExportKind.STAFF: STAFF_COLUMNS,
    ExportKind.ATTENDANCE: ATTENDANCE_COLUMNS,
    ExportKind.LEAVES: LEAVE_COLUMNS,
    ExportKind.PAYROLL: PAYROLL_COLUMNS,
}


def format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, date):
        return format_date(value)
    if isinstance(value, time):
        return format_time(value)
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


class CsvExportWriter:
    def columns(self, kind: ExportKind) -> list[str]:
        return [header for header, _ in EXPORT_COLUMNS[kind]]

    def stream(self, kind: ExportKind, records: Iterable[Any]) -> Iterator[str]:
        """Yield the header line, then one CSV line per record."""
        columns = EXPORT_COLUMNS[kind]
        yield self._line([header for header, _ in columns])
        for record in records:
            yield self._line([format_cell(getter(record)) for _, getter in columns])

    @staticmethod
    def _line(cells: list[str]) -> str:
        out = io.StringIO()
        csv.writer(out, lineterminator="\r\n").writerow(cells)
        return out.getvalue()

from __future__ import annotations

import csv
import io
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from src.hr_pipeline.hr_pipeline.attendance.model import WorkLog
from src.hr_pipeline.hr_pipeline.core.enums import ApprovalStatus, EmploymentStatus, ExportKind, WorkLogStatus
from src.hr_pipeline.hr_pipeline.core.exceptions import ValidationError
from src.hr_pipeline.hr_pipeline.exports.service import ExportService
from src.hr_pipeline.hr_pipeline.exports.writer import CsvExportWriter
from src.hr_pipeline.hr_pipeline.leave.model import TimeOffRequest
from src.hr_pipeline.hr_pipeline.payroll.model import SalarySlip


def _read(chunks) -> list[list[str]]:
    return list(csv.reader(io.StringIO("".join(chunks))))


def test_staff_export_formats_cells(member_factory):
    member = member_factory(
        1,
        "Ann",
        "Lee",
        date_of_birth=date(1990, 5, 1),
        base_salary=Decimal("1234.50"),
        employment_status=EmploymentStatus.PROBATION,
        division_name="Engineering",
    )

    rows = _read(CsvExportWriter().stream(ExportKind.STAFF, [member]))

    assert rows[0] == CsvExportWriter().columns(ExportKind.STAFF)
    assert rows[1] == [
        "STF00001", "Ann", "Lee", "", "", "1990-05-01", "", "2024-01-01",
        "1234.50", "probation", "", "Engineering", "",
    ]


def test_stream_is_lazy_and_header_only_for_empty_input():
    chunks = CsvExportWriter().stream(ExportKind.PAYROLL, [])

    assert next(chunks).startswith("Slip Reference,Staff Code")
    assert list(chunks) == []


def test_values_with_delimiters_are_quoted():
    slip = SalarySlip(
        slip_reference="SLP-1",
        salary_period="2025-03",
        staff_code="STF00001",
        staff_name='Lee, "Ann"',
        division_name=None,
        basic_salary=Decimal("100"),
        total_earnings=Decimal("120"),
        total_deductions=Decimal("20"),
        net_payable=Decimal("100"),
        status="paid",
    )

    rows = _read(CsvExportWriter().stream(ExportKind.PAYROLL, [slip]))

    assert rows[1][2] == 'Lee, "Ann"'
    assert rows[1][3] == ""


@pytest.fixture
def exports(staff_repo, work_logs_repo, leave_repo, salary_repo, fixed_now):
    return ExportService(
        staff=staff_repo,
        work_logs=work_logs_repo,
        leave=leave_repo,
        salary_slips=salary_repo,
        clock=lambda: fixed_now,
    )


def test_attendance_export(exports, work_logs_repo):
    work_logs_repo.add(
        WorkLog(
            work_log_id=1,
            staff_member_id=1,
            log_date=date(2025, 3, 3),
            status=WorkLogStatus.PRESENT,
            clock_in=time(9, 5),
            clock_out=None,
            late_minutes=5,
        )
    )

    filename, chunks = exports.export_attendance(start_date="2025-03-01", end_date="2025-03-31")
    rows = _read(chunks)

    assert filename == "attendance_2025-03-01_to_2025-03-31.csv"
    assert rows[1] == ["STF00001", "Ann Lee", "2025-03-03", "present", "09:05", "", "5", "0", "0"]


def test_attendance_export_requires_ordered_range(exports):
    with pytest.raises(ValidationError):
        exports.export_attendance(start_date="2025-03-31", end_date="2025-03-01")
    with pytest.raises(ValidationError):
        exports.export_attendance(start_date=None, end_date="2025-03-01")


def test_leave_export_filters(exports, leave_repo):
    leave_repo.requests = [
        TimeOffRequest(
            request_id=1,
            staff_member_id=1,
            category_id=1,
            start_date=date(2025, 2, 3),
            end_date=date(2025, 2, 4),
            total_days=Decimal("2.0"),
            approval_status=ApprovalStatus.APPROVED,
            staff_code="STF00001",
            staff_name="Ann Lee",
            category_title="Annual",
        )
    ]

    filename, chunks = exports.export_leaves(year="2025", month="2", status="approved")
    rows = _read(chunks)

    assert filename == "leaves_2025.csv"
    assert rows[1] == ["STF00001", "Ann Lee", "Annual", "2025-02-03", "2025-02-04", "2.0", "approved", ""]
    assert leave_repo.calls[-1]["approval_status"] == ApprovalStatus.APPROVED

    with pytest.raises(ValidationError):
        exports.export_leaves(year="2025", status="maybe")


def test_payroll_export_requires_period(exports):
    with pytest.raises(ValidationError):
        exports.export_payroll(salary_period="March 2025")

    filename, _ = exports.export_payroll(salary_period="2025-03")
    assert filename == "payroll_2025-03.csv"


def test_staff_export_filename_uses_today(exports, fixed_now):
    filename, chunks = exports.export_staff(status="active")

    assert filename == f"staff_members_{fixed_now:%Y-%m-%d}.csv"
    assert len(_read(chunks)) == 3

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_work_log_repository import MySQLWorkLogRepository
from .core.constants import DEFAULT_STAFF_CODE_PREFIX
from .database.connection import DBConfig, DatabaseConnection
from .exports.service import ExportService
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .imports.kinds import ImportTargets
from .imports.mysql_import_repository import MySQLImportJobRepository
from .imports.service import ImportService
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .payroll.mysql_salary_slip_repository import MySQLSalarySlipRepository
from .reports.service import (
    AttendanceReportService,
    HeadcountReportService,
    LeaveBalanceService,
    LeaveReportService,
    PayrollReportService,
)
from .staff.mysql_staff_repository import MySQLStaffRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    staff_repo: MySQLStaffRepository
    work_logs_repo: MySQLWorkLogRepository
    holidays_repo: MySQLHolidayRepository
    leave_repo: MySQLLeaveRepository
    salary_slips_repo: MySQLSalarySlipRepository
    import_jobs_repo: MySQLImportJobRepository

    import_service: ImportService
    export_service: ExportService
    attendance_report_service: AttendanceReportService
    leave_balance_service: LeaveBalanceService
    leave_report_service: LeaveReportService
    payroll_report_service: PayrollReportService
    headcount_report_service: HeadcountReportService


def build_container(
    *,
    db_config: dict,
    upload_folder: Optional[str] = None,
    staff_code_prefix: str = DEFAULT_STAFF_CODE_PREFIX,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    staff_repo = MySQLStaffRepository(conn, staff_code_prefix=staff_code_prefix)
    work_logs_repo = MySQLWorkLogRepository(conn)
    holidays_repo = MySQLHolidayRepository(conn)
    leave_repo = MySQLLeaveRepository(conn)
    salary_slips_repo = MySQLSalarySlipRepository(conn)
    import_jobs_repo = MySQLImportJobRepository(conn)

    import_service = ImportService(
        import_jobs_repo,
        ImportTargets(staff=staff_repo, work_logs=work_logs_repo, holidays=holidays_repo),
        upload_folder=upload_folder,
    )
    export_service = ExportService(
        staff=staff_repo,
        work_logs=work_logs_repo,
        leave=leave_repo,
        salary_slips=salary_slips_repo,
    )

    return Container(
        conn=conn,
        staff_repo=staff_repo,
        work_logs_repo=work_logs_repo,
        holidays_repo=holidays_repo,
        leave_repo=leave_repo,
        salary_slips_repo=salary_slips_repo,
        import_jobs_repo=import_jobs_repo,
        import_service=import_service,
        export_service=export_service,
        attendance_report_service=AttendanceReportService(staff_repo, work_logs_repo),
        leave_balance_service=LeaveBalanceService(leave_repo, staff_repo),
        leave_report_service=LeaveReportService(leave_repo),
        payroll_report_service=PayrollReportService(salary_slips_repo),
        headcount_report_service=HeadcountReportService(staff_repo),
    )

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from src.hr_pipeline.hr_pipeline.attendance.model import WorkLog, WorkLogDraft, WorkLogExportRow
from src.hr_pipeline.hr_pipeline.core.enums import EmploymentStatus, ImportStatus
from src.hr_pipeline.hr_pipeline.holidays.model import CompanyHoliday, HolidayDraft
from src.hr_pipeline.hr_pipeline.imports.kinds import ImportTargets
from src.hr_pipeline.hr_pipeline.imports.model import ImportJob
from src.hr_pipeline.hr_pipeline.imports.service import ImportService
from src.hr_pipeline.hr_pipeline.staff.model import StaffMember, StaffRecord


class InMemoryStaff:
    def __init__(self, members=()):
        self.members: dict[int, StaffMember] = {m.staff_member_id: m for m in members}
        self._id = max(self.members, default=0)

    def get_by_id(self, staff_member_id: int) -> Optional[StaffMember]:
        return self.members.get(staff_member_id)

    def get_by_staff_code(self, staff_code: str) -> Optional[StaffMember]:
        for m in self.members.values():
            if m.staff_code == staff_code:
                return m
        return None

    def create(self, record: StaffRecord) -> int:
        self._id += 1
        self.members[self._id] = StaffMember(
            staff_member_id=self._id,
            staff_code=f"STF{self._id:05d}",
            first_name=record.first_name,
            last_name=record.last_name,
            personal_email=record.personal_email,
            phone_number=record.phone_number,
            date_of_birth=record.date_of_birth,
            gender=record.gender,
            hire_date=record.hire_date,
            base_salary=record.base_salary,
            employment_status=record.employment_status,
        )
        return self._id

    def list_members(self, *, office_location_id=None, division_id=None, employment_status=None, staff_member_id=None):
        out = list(self.members.values())
        if office_location_id:
            out = [m for m in out if m.office_location_id == office_location_id]
        if division_id:
            out = [m for m in out if m.division_id == division_id]
        if employment_status:
            out = [m for m in out if m.employment_status == employment_status]
        if staff_member_id:
            out = [m for m in out if m.staff_member_id == staff_member_id]
        return out


class InMemoryWorkLogs:
    def __init__(self, staff: Optional[InMemoryStaff] = None):
        self._staff = staff
        self.rows: dict[tuple[int, date], WorkLog] = {}
        self._id = 0

    def add(self, log: WorkLog) -> None:
        self.rows[(log.staff_member_id, log.log_date)] = log

    def get_for_staff_and_date(self, staff_member_id: int, log_date: date) -> Optional[WorkLog]:
        return self.rows.get((staff_member_id, log_date))

    def upsert(self, draft: WorkLogDraft) -> int:
        key = (draft.staff_member_id, draft.log_date)
        existing = self.rows.get(key)
        if existing:
            self.rows[key] = replace(existing, status=draft.status, clock_in=draft.clock_in, clock_out=draft.clock_out)
            return existing.work_log_id
        self._id += 1
        self.rows[key] = WorkLog(
            work_log_id=self._id,
            staff_member_id=draft.staff_member_id,
            log_date=draft.log_date,
            status=draft.status,
            clock_in=draft.clock_in,
            clock_out=draft.clock_out,
        )
        return self._id

    def list_for_staff(self, *, staff_member_id: int, start_date: date, end_date: date):
        return sorted(
            (
                r
                for r in self.rows.values()
                if r.staff_member_id == staff_member_id and start_date <= r.log_date <= end_date
            ),
            key=lambda r: r.log_date,
        )

    def get_export_rows(self, *, start_date: date, end_date: date, staff_member_id=None):
        out = []
        for r in sorted(self.rows.values(), key=lambda r: r.log_date):
            if not (start_date <= r.log_date <= end_date):
                continue
            if staff_member_id and r.staff_member_id != staff_member_id:
                continue
            member = self._staff.get_by_id(r.staff_member_id) if self._staff else None
            out.append(
                WorkLogExportRow(
                    staff_code=member.staff_code if member else "",
                    staff_name=member.full_name if member else "",
                    log_date=r.log_date,
                    status=r.status,
                    clock_in=r.clock_in,
                    clock_out=r.clock_out,
                    late_minutes=r.late_minutes,
                    overtime_minutes=r.overtime_minutes,
                    early_leave_minutes=r.early_leave_minutes,
                )
            )
        return out


class InMemoryHolidays:
    def __init__(self):
        self.rows: dict[date, CompanyHoliday] = {}
        self._id = 0

    def get_by_date(self, holiday_date: date) -> Optional[CompanyHoliday]:
        return self.rows.get(holiday_date)

    def upsert_by_date(self, draft: HolidayDraft) -> int:
        existing = self.rows.get(draft.holiday_date)
        holiday_id = existing.holiday_id if existing else self._id + 1
        if not existing:
            self._id = holiday_id
        self.rows[draft.holiday_date] = CompanyHoliday(
            holiday_id=holiday_id,
            title=draft.title,
            holiday_date=draft.holiday_date,
            is_optional=draft.is_optional,
        )
        return holiday_id


class InMemoryImportJobs:
    def __init__(self):
        self.jobs: dict[int, ImportJob] = {}
        self.finalize_calls = 0
        self._id = 0

    def create_job(self, *, kind, file_path, original_name, author_id, started_at) -> int:
        self._id += 1
        self.jobs[self._id] = ImportJob(
            import_id=self._id,
            kind=kind,
            file_path=file_path,
            original_name=original_name,
            status=ImportStatus.PROCESSING,
            started_at=started_at,
            author_id=author_id,
        )
        return self._id

    def finalize_job(
        self, *, import_id, status, total_rows, processed_rows, success_rows, error_rows, errors, completed_at
    ) -> bool:
        job = self.jobs.get(import_id)
        if not job or job.status != ImportStatus.PROCESSING:
            return False
        self.finalize_calls += 1
        self.jobs[import_id] = replace(
            job,
            status=status,
            total_rows=total_rows,
            processed_rows=processed_rows,
            success_rows=success_rows,
            error_rows=error_rows,
            errors=list(errors),
            completed_at=completed_at,
        )
        return True

    def get_job(self, import_id: int) -> Optional[ImportJob]:
        return self.jobs.get(import_id)

    def list_jobs(self, *, kind=None, status=None, limit: int = 50):
        out = sorted(self.jobs.values(), key=lambda j: j.import_id, reverse=True)
        if kind:
            out = [j for j in out if j.kind == kind]
        if status:
            out = [j for j in out if j.status == status]
        return out[:limit]


class InMemoryLeave:
    def __init__(self, categories=(), requests=()):
        self.categories = list(categories)
        self.requests = list(requests)
        self.calls: list[dict] = []

    def list_categories(self, *, active_only: bool = True):
        return [c for c in self.categories if c.is_active or not active_only]

    def list_requests(self, *, year, month=None, category_id=None, staff_member_id=None, approval_status=None):
        self.calls.append(
            {
                "year": year,
                "month": month,
                "category_id": category_id,
                "staff_member_id": staff_member_id,
                "approval_status": approval_status,
            }
        )
        out = [r for r in self.requests if r.start_date.year == year]
        if month:
            out = [r for r in out if r.start_date.month == month]
        if category_id:
            out = [r for r in out if r.category_id == category_id]
        if staff_member_id:
            out = [r for r in out if r.staff_member_id == staff_member_id]
        if approval_status:
            out = [r for r in out if r.approval_status == approval_status]
        return out


class InMemorySalarySlips:
    def __init__(self, slips=()):
        self.slips = list(slips)

    def list_for_period(self, salary_period: str, *, staff_member_id=None, office_location_id=None, division_id=None):
        out = [s for s in self.slips if s.salary_period == salary_period]
        if staff_member_id:
            out = [s for s in out if s.staff_member_id == staff_member_id]
        if office_location_id:
            out = [s for s in out if s.office_location_id == office_location_id]
        if division_id:
            out = [s for s in out if s.division_id == division_id]
        return out


def make_member(staff_member_id: int, first_name: str = "Ann", last_name: str = "Lee", **kwargs) -> StaffMember:
    data = {
        "staff_member_id": staff_member_id,
        "staff_code": f"STF{staff_member_id:05d}",
        "first_name": first_name,
        "last_name": last_name,
        "personal_email": None,
        "phone_number": None,
        "date_of_birth": None,
        "gender": None,
        "hire_date": date(2024, 1, 1),
        "base_salary": Decimal("1000"),
        "employment_status": EmploymentStatus.ACTIVE,
    }
    data.update(kwargs)
    return StaffMember(**data)


@pytest.fixture
def fixed_now():
    return datetime(2025, 3, 10, 9, 30)


@pytest.fixture
def staff_repo():
    return InMemoryStaff([make_member(1, "Ann", "Lee"), make_member(2, "Bob", "Tran")])


@pytest.fixture
def work_logs_repo(staff_repo):
    return InMemoryWorkLogs(staff_repo)


@pytest.fixture
def holidays_repo():
    return InMemoryHolidays()


@pytest.fixture
def jobs_repo():
    return InMemoryImportJobs()


@pytest.fixture
def import_service(jobs_repo, staff_repo, work_logs_repo, holidays_repo, fixed_now, tmp_path):
    return ImportService(
        jobs_repo,
        ImportTargets(staff=staff_repo, work_logs=work_logs_repo, holidays=holidays_repo),
        clock=lambda: fixed_now,
        upload_folder=tmp_path,
    )


@pytest.fixture
def member_factory():
    return make_member


@pytest.fixture
def leave_repo():
    return InMemoryLeave()


@pytest.fixture
def salary_repo():
    return InMemorySalarySlips()

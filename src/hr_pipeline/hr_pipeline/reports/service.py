from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.repository import WorkLogRepository
from ..common.datetime_utils import format_date, month_bounds
from ..common.validators import require_period, require_year
from ..core.enums import ApprovalStatus, EmploymentStatus, WorkLogStatus
from ..core.exceptions import ValidationError
from ..leave.model import TimeOffCategory, TimeOffRequest
from ..leave.repository import LeaveRepository
from ..payroll.repository import SalarySlipRepository
from ..staff.model import StaffMember
from ..staff.repository import StaffRepository


@dataclass(frozen=True)
class AttendanceSummary:
    staff_member_id: int
    staff_code: str
    full_name: str
    present_days: int = 0
    absent_days: int = 0
    half_days: int = 0
    on_leave_days: int = 0
    holiday_days: int = 0
    total_late_minutes: int = 0
    total_overtime_minutes: int = 0
    total_early_leave_minutes: int = 0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["staff_member"] = {
            "id": data.pop("staff_member_id"),
            "staff_code": data.pop("staff_code"),
            "full_name": data.pop("full_name"),
        }
        return data


@dataclass(frozen=True)
class LeaveBalance:
    """Balance of one leave category for one staff member in one accounting year.

    remaining = allocated - used (not clamped); available adds the carried-forward days.
    """

    category_id: int
    category_title: str
    allocated: int
    used: Decimal
    remaining: Decimal
    carried_forward: Decimal = Decimal(0)

    @property
    def available(self) -> Decimal:
        return self.remaining + self.carried_forward

    def to_dict(self) -> dict:
        return {
            "category_id": self.category_id,
            "category_name": self.category_title,
            "allocated": self.allocated,
            "used": float(self.used),
            "remaining": float(self.remaining),
            "carried_forward": float(self.carried_forward),
            "available": float(self.available),
        }


def _non_negative(value: Optional[int]) -> int:
    return max(int(value or 0), 0)


class AttendanceReportService:
    """Folds work-log rows into per-staff attendance summaries."""

    def __init__(self, staff: StaffRepository, work_logs: WorkLogRepository):
        self._staff = staff
        self._work_logs = work_logs

    def summarize(self, staff_members: Sequence[StaffMember], *, start: date, end: date) -> list[AttendanceSummary]:
        if end < start:
            raise ValidationError("end_date must be on or after start_date")

        out: list[AttendanceSummary] = []
        for member in staff_members:
            logs = self._work_logs.list_for_staff(
                staff_member_id=member.staff_member_id, start_date=start, end_date=end
            )
            counts = Counter(log.status for log in logs)
            out.append(
                AttendanceSummary(
                    staff_member_id=member.staff_member_id,
                    staff_code=member.staff_code,
                    full_name=member.full_name,
                    present_days=counts[WorkLogStatus.PRESENT],
                    absent_days=counts[WorkLogStatus.ABSENT],
                    half_days=counts[WorkLogStatus.HALF_DAY],
                    on_leave_days=counts[WorkLogStatus.ON_LEAVE],
                    holiday_days=counts[WorkLogStatus.HOLIDAY],
                    total_late_minutes=sum(_non_negative(log.late_minutes) for log in logs),
                    total_overtime_minutes=sum(_non_negative(log.overtime_minutes) for log in logs),
                    total_early_leave_minutes=sum(_non_negative(log.early_leave_minutes) for log in logs),
                )
            )
        return out

    def monthly_report(
        self,
        *,
        month: Optional[str],
        office_location_id: Optional[int] = None,
        division_id: Optional[int] = None,
        staff_member_id: Optional[int] = None,
    ) -> dict:
        year, month_no = require_period(month, "month")
        start, end = month_bounds(year, month_no)

        population = self._staff.list_members(
            office_location_id=office_location_id,
            division_id=division_id,
            employment_status=EmploymentStatus.ACTIVE,
            staff_member_id=staff_member_id,
        )
        summaries = self.summarize(population, start=start, end=end)
        return {
            "period": f"{year:04d}-{month_no:02d}",
            "start_date": format_date(start),
            "end_date": format_date(end),
            "total_working_days": end.day,
            "report": [s.to_dict() for s in summaries],
        }


def _approved_days(requests: Sequence[TimeOffRequest]) -> dict[tuple[int, int], Decimal]:
    used: dict[tuple[int, int], Decimal] = defaultdict(Decimal)
    for r in requests:
        if r.approval_status != ApprovalStatus.APPROVED:
            continue
        used[(r.staff_member_id, r.category_id)] += Decimal(r.total_days)
    return used


class LeaveBalanceService:
    """Per-category leave balances for an explicit accounting year."""

    def __init__(self, leave: LeaveRepository, staff: StaffRepository):
        self._leave = leave
        self._staff = staff

    def balances(self, staff_member_id: int, *, year: int) -> list[LeaveBalance]:
        categories = self._leave.list_categories(active_only=True)
        used = _approved_days(self._leave.list_requests(year=year, staff_member_id=int(staff_member_id)))
        previous = _approved_days(self._leave.list_requests(year=year - 1, staff_member_id=int(staff_member_id)))
        return [self._balance(c, int(staff_member_id), used, previous) for c in categories]

    def all_balances(self, *, year: int) -> dict[int, list[LeaveBalance]]:
        """Admin view: balances of every staff member, keyed by staff id."""
        categories = self._leave.list_categories(active_only=True)
        used = _approved_days(self._leave.list_requests(year=year))
        previous = _approved_days(self._leave.list_requests(year=year - 1))
        return {
            m.staff_member_id: [self._balance(c, m.staff_member_id, used, previous) for c in categories]
            for m in self._staff.list_members()
        }

    @staticmethod
    def _balance(
        category: TimeOffCategory,
        staff_member_id: int,
        used: dict[tuple[int, int], Decimal],
        previous: dict[tuple[int, int], Decimal],
    ) -> LeaveBalance:
        key = (staff_member_id, category.category_id)
        allocated = int(category.annual_quota or 0)
        used_days = used.get(key, Decimal(0))

        carried = Decimal(0)
        if category.is_carry_forward_allowed:
            left_over = Decimal(allocated) - previous.get(key, Decimal(0))
            carried = min(Decimal(category.max_carry_forward_days or 0), max(left_over, Decimal(0)))

        return LeaveBalance(
            category_id=category.category_id,
            category_title=category.title,
            allocated=allocated,
            used=used_days,
            remaining=Decimal(allocated) - used_days,
            carried_forward=carried,
        )


class LeaveReportService:
    def __init__(self, leave: LeaveRepository):
        self._leave = leave

    def report(
        self,
        *,
        year,
        month: Optional[int] = None,
        category_id: Optional[int] = None,
        staff_member_id: Optional[int] = None,
    ) -> dict:
        year = require_year(year)
        requests = self._leave.list_requests(
            year=year, month=month, category_id=category_id, staff_member_id=staff_member_id
        )
        by_status = Counter(r.approval_status for r in requests)
        approved = [r for r in requests if r.approval_status == ApprovalStatus.APPROVED]

        by_category: dict[int, dict] = {}
        for r in approved:
            entry = by_category.get(r.category_id)
            if not entry:
                entry = {
                    "category_id": r.category_id,
                    "category_title": r.category_title,
                    "count": 0,
                    "total_days": Decimal(0),
                }
                by_category[r.category_id] = entry
            entry["count"] += 1
            entry["total_days"] += Decimal(r.total_days)

        return {
            "year": year,
            "month": month if month else "all",
            "summary": {
                "total_requests": len(requests),
                "approved": by_status[ApprovalStatus.APPROVED],
                "pending": by_status[ApprovalStatus.PENDING],
                "declined": by_status[ApprovalStatus.DECLINED],
                "total_days_taken": float(sum((Decimal(r.total_days) for r in approved), Decimal(0))),
            },
            "by_category": [{**e, "total_days": float(e["total_days"])} for e in by_category.values()],
            "requests": [
                {
                    "id": r.request_id,
                    "staff_member_id": r.staff_member_id,
                    "staff_code": r.staff_code,
                    "staff_name": r.staff_name,
                    "category_id": r.category_id,
                    "category_title": r.category_title,
                    "start_date": format_date(r.start_date),
                    "end_date": format_date(r.end_date),
                    "total_days": float(r.total_days),
                    "approval_status": r.approval_status.value,
                    "reason": r.reason,
                }
                for r in requests
            ],
        }


def _money(value: Decimal) -> float:
    return float(value)


class PayrollReportService:
    """Totals of one salary period, overall and per division."""

    def __init__(self, salary_slips: SalarySlipRepository):
        self._salary_slips = salary_slips

    def report(
        self,
        *,
        salary_period: Optional[str],
        office_location_id: Optional[int] = None,
        division_id: Optional[int] = None,
    ) -> dict:
        year, month_no = require_period(salary_period, "salary_period")
        period = f"{year:04d}-{month_no:02d}"
        slips = self._salary_slips.list_for_period(
            period, office_location_id=office_location_id, division_id=division_id
        )

        paid = sum(1 for s in slips if s.status == "paid")
        by_division: dict[Optional[int], dict] = {}
        for s in slips:
            entry = by_division.get(s.division_id)
            if not entry:
                entry = {
                    "division_id": s.division_id,
                    "division_title": s.division_name or "Unassigned",
                    "employee_count": 0,
                    "total_net_payable": Decimal(0),
                }
                by_division[s.division_id] = entry
            entry["employee_count"] += 1
            entry["total_net_payable"] += s.net_payable

        return {
            "salary_period": period,
            "summary": {
                "total_employees": len(slips),
                "total_basic_salary": _money(sum((s.basic_salary for s in slips), Decimal(0))),
                "total_earnings": _money(sum((s.total_earnings for s in slips), Decimal(0))),
                "total_deductions": _money(sum((s.total_deductions for s in slips), Decimal(0))),
                "total_net_payable": _money(sum((s.net_payable for s in slips), Decimal(0))),
                "paid_count": paid,
                "pending_count": len(slips) - paid,
            },
            "by_division": [
                {**e, "total_net_payable": _money(e["total_net_payable"])} for e in by_division.values()
            ],
            "slips": [
                {
                    "slip_reference": s.slip_reference,
                    "staff_member_id": s.staff_member_id,
                    "staff_code": s.staff_code,
                    "staff_name": s.staff_name,
                    "division_name": s.division_name,
                    "basic_salary": _money(s.basic_salary),
                    "total_earnings": _money(s.total_earnings),
                    "total_deductions": _money(s.total_deductions),
                    "net_payable": _money(s.net_payable),
                    "status": s.status,
                }
                for s in slips
            ],
        }


class HeadcountReportService:
    """Active staff counted by office location, division and job title."""

    def __init__(self, staff: StaffRepository):
        self._staff = staff

    def report(self) -> dict:
        active = self._staff.list_members(employment_status=EmploymentStatus.ACTIVE)
        return {
            "total_active": len(active),
            "by_location": self._count(active, "office_location_id", "office_location_name", "location"),
            "by_division": self._count(active, "division_id", "division_name", "division"),
            "by_job_title": self._count(active, "job_title_id", "job_title_name", "job_title"),
        }

    @staticmethod
    def _count(members: Sequence[StaffMember], id_attr: str, name_attr: str, label: str) -> list[dict]:
        groups: dict[Optional[int], dict] = {}
        for m in members:
            key = getattr(m, id_attr)
            entry = groups.get(key)
            if not entry:
                entry = {
                    f"{label}_id": key,
                    f"{label}_name": getattr(m, name_attr) or "Unassigned",
                    "count": 0,
                }
                groups[key] = entry
            entry["count"] += 1
        return list(groups.values())

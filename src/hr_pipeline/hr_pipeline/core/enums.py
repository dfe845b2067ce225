from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used by the route guards."""

    ADMIN = "admin"
    STAFF = "staff"


class ImportStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class EmploymentStatus(str, Enum):
    ACTIVE = "active"
    PROBATION = "probation"
    TERMINATED = "terminated"


class WorkLogStatus(str, Enum):
    """Day status stored on a work-log row."""

    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half_day"
    ON_LEAVE = "on_leave"
    HOLIDAY = "holiday"


class ApprovalStatus(str, Enum):
    """Approval workflow status of a time-off request."""

    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"


class ExportKind(str, Enum):
    STAFF = "staff"
    ATTENDANCE = "attendance"
    LEAVES = "leaves"
    PAYROLL = "payroll"


class ImportKind(str, Enum):
    """Closed set of import kinds; see imports.kinds for the per-kind columns/mapping."""

    STAFF_MEMBERS = "staff_members"
    WORK_LOGS = "work_logs"
    COMPANY_HOLIDAYS = "company_holidays"

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import EmploymentStatus


@dataclass(frozen=True)
class StaffRecord:
    """Import projection of a staff member (no id, no resolved org names).

    Office location, division and job title are left unresolved on import.
    """

    first_name: str
    last_name: str
    personal_email: Optional[str]
    phone_number: Optional[str]
    date_of_birth: Optional[date]
    gender: Optional[str]
    hire_date: date
    base_salary: Decimal
    employment_status: EmploymentStatus = EmploymentStatus.ACTIVE


@dataclass(frozen=True)
class StaffMember:
    """Domain entity: persisted staff member, with org names resolved for export."""

    staff_member_id: int
    staff_code: str
    first_name: str
    last_name: str
    personal_email: Optional[str]
    phone_number: Optional[str]
    date_of_birth: Optional[date]
    gender: Optional[str]
    hire_date: Optional[date]
    base_salary: Decimal
    employment_status: EmploymentStatus
    office_location_id: Optional[int] = None
    division_id: Optional[int] = None
    job_title_id: Optional[int] = None
    office_location_name: Optional[str] = None
    division_name: Optional[str] = None
    job_title_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class SalarySlip:
    """Read-model of a generated salary slip, joined with its staff member."""

    slip_reference: str
    salary_period: str
    staff_code: Optional[str]
    staff_name: Optional[str]
    division_name: Optional[str]
    basic_salary: Decimal
    total_earnings: Decimal
    total_deductions: Decimal
    net_payable: Decimal
    status: str
    staff_member_id: Optional[int] = None
    office_location_id: Optional[int] = None
    division_id: Optional[int] = None

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import ApprovalStatus


@dataclass(frozen=True)
class TimeOffCategory:
    """Leave category with its annual quota and carry-forward policy."""

    category_id: int
    title: str
    annual_quota: int
    is_active: bool = True
    is_carry_forward_allowed: bool = False
    max_carry_forward_days: int = 0


@dataclass(frozen=True)
class TimeOffRequest:
    request_id: int
    staff_member_id: int
    category_id: int
    start_date: date
    end_date: date
    total_days: Decimal
    approval_status: ApprovalStatus
    reason: Optional[str] = None
    staff_code: Optional[str] = None
    staff_name: Optional[str] = None
    category_title: Optional[str] = None

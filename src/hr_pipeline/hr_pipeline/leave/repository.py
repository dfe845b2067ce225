from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus
from .model import TimeOffCategory, TimeOffRequest


class LeaveRepository(Protocol):
    def list_categories(self, *, active_only: bool = True) -> Sequence[TimeOffCategory]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        year: int,
        month: Optional[int] = None,
        category_id: Optional[int] = None,
        staff_member_id: Optional[int] = None,
        approval_status: Optional[ApprovalStatus] = None,
    ) -> Sequence[TimeOffRequest]:
        """Requests whose start_date falls in the given year (and month)."""

        raise NotImplementedError

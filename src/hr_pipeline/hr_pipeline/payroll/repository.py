from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SalarySlip


class SalarySlipRepository(Protocol):
    def list_for_period(
        self,
        salary_period: str,
        *,
        staff_member_id: Optional[int] = None,
        office_location_id: Optional[int] = None,
        division_id: Optional[int] = None,
    ) -> Sequence[SalarySlip]:
        raise NotImplementedError

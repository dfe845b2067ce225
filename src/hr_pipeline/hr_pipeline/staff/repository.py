from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EmploymentStatus
from .model import StaffMember, StaffRecord


class StaffRepository(Protocol):
    """Repository interface for staff members.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, staff_member_id: int) -> Optional[StaffMember]:
        raise NotImplementedError

    def get_by_staff_code(self, staff_code: str) -> Optional[StaffMember]:
        raise NotImplementedError

    def create(self, record: StaffRecord) -> int:
        """Plain insert; a staff code is generated for the new row."""

        raise NotImplementedError

    def list_members(
        self,
        *,
        office_location_id: Optional[int] = None,
        division_id: Optional[int] = None,
        employment_status: Optional[EmploymentStatus] = None,
        staff_member_id: Optional[int] = None,
    ) -> Sequence[StaffMember]:
        raise NotImplementedError

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import WorkLog, WorkLogDraft, WorkLogExportRow


class WorkLogRepository(Protocol):
    def get_for_staff_and_date(self, staff_member_id: int, log_date: date) -> Optional[WorkLog]:
        raise NotImplementedError

    def upsert(self, draft: WorkLogDraft) -> int:
        """Insert or overwrite the row keyed on (staff_member_id, log_date)."""

        raise NotImplementedError

    def list_for_staff(self, *, staff_member_id: int, start_date: date, end_date: date) -> Sequence[WorkLog]:
        """Rows with start_date <= log_date <= end_date."""

        raise NotImplementedError

    def get_export_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        staff_member_id: Optional[int] = None,
    ) -> Sequence[WorkLogExportRow]:
        raise NotImplementedError

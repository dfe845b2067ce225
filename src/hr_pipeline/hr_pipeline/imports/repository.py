from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ImportKind, ImportStatus
from .model import ImportJob


class ImportJobRepository(Protocol):
    def create_job(
        self,
        *,
        kind: ImportKind,
        file_path: str,
        original_name: str,
        author_id: Optional[int],
        started_at: datetime,
    ) -> int:
        """Create the job row in processing state."""

        raise NotImplementedError

    def finalize_job(
        self,
        *,
        import_id: int,
        status: ImportStatus,
        total_rows: int,
        processed_rows: int,
        success_rows: int,
        error_rows: int,
        errors: Sequence[str],
        completed_at: datetime,
    ) -> bool:
        raise NotImplementedError

    def get_job(self, import_id: int) -> Optional[ImportJob]:
        raise NotImplementedError

    def list_jobs(
        self,
        *,
        kind: Optional[ImportKind] = None,
        status: Optional[ImportStatus] = None,
        limit: int = 50,
    ) -> Sequence[ImportJob]:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import ImportKind, ImportStatus


@dataclass(frozen=True)
class ImportJob:
    """One batch import run and its final counters.

    Once completed: processed_rows == success_rows + error_rows == total_rows.
    """

    import_id: int
    kind: ImportKind
    file_path: str
    original_name: str
    status: ImportStatus
    total_rows: int = 0
    processed_rows: int = 0
    success_rows: int = 0
    error_rows: int = 0
    errors: list[str] = field(default_factory=list)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    author_id: Optional[int] = None

    @property
    def progress_percentage(self) -> int:
        if self.total_rows == 0:
            return 0
        return int(round(self.processed_rows / self.total_rows * 100))

    def to_dict(self) -> dict:
        return {
            "id": self.import_id,
            "import_type": self.kind.value,
            "file_path": self.file_path,
            "original_name": self.original_name,
            "status": self.status.value,
            "total_rows": self.total_rows,
            "processed_rows": self.processed_rows,
            "success_rows": self.success_rows,
            "error_rows": self.error_rows,
            "errors": list(self.errors),
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "author_id": self.author_id,
        }

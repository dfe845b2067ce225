from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Sequence, TextIO, Union

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_JOB_LIST_LIMIT
from ..core.enums import ImportKind, ImportStatus
from ..core.exceptions import NotFoundError, RowError, ValidationError
from .kinds import ImportTargets, spec_for
from .mapper import RecordMapper
from .model import ImportJob
from .parser import CsvRowSource
from .repository import ImportJobRepository

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".csv", ".txt"}


class ImportService:
    """Runs one import file to completion: parse -> map -> persist, row by row.

    A failing row is recorded as "Row N: <reason>" and the run continues. The
    job row is created in processing state and finalized exactly once.
    """

    def __init__(
        self,
        jobs: ImportJobRepository,
        targets: ImportTargets,
        *,
        mapper: Optional[RecordMapper] = None,
        clock: Callable[[], datetime] = now_local,
        upload_folder: Optional[str | Path] = None,
    ):
        self._jobs = jobs
        self._targets = targets
        self._clock = clock
        self._mapper = mapper or RecordMapper(targets.staff, clock=clock)
        self._upload_folder = Path(upload_folder) if upload_folder else None

    def template(self, kind: ImportKind) -> dict:
        return spec_for(kind).template()

    def get_job(self, import_id: int) -> ImportJob:
        job = self._jobs.get_job(int(import_id))
        if not job:
            raise NotFoundError("Import not found")
        return job

    def list_jobs(
        self,
        *,
        kind: Optional[ImportKind] = None,
        status: Optional[ImportStatus] = None,
        limit: int = DEFAULT_JOB_LIST_LIMIT,
    ) -> Sequence[ImportJob]:
        return self._jobs.list_jobs(kind=kind, status=status, limit=limit)

    def accept_upload(self, kind: ImportKind, upload: Optional[FileStorage], *, author_id: Optional[int]) -> ImportJob:
        """Store an uploaded file under <upload_folder>/imports and run it."""
        if upload is None or not upload.filename:
            raise ValidationError("file is required")
        if Path(upload.filename).suffix.lower() not in ALLOWED_EXTENSIONS:
            raise ValidationError("Only delimited text files (.csv, .txt) are supported")
        if self._upload_folder is None:
            raise ValidationError("Uploads are not configured")

        target_dir = self._upload_folder / "imports"
        target_dir.mkdir(parents=True, exist_ok=True)
        stored_name = f"{self._clock().strftime('%Y%m%d%H%M%S')}_{secure_filename(upload.filename) or 'upload.csv'}"
        stored_path = target_dir / stored_name
        upload.save(str(stored_path))

        try:
            with open(stored_path, "rb") as stream:
                return self.run(
                    kind,
                    stream,
                    file_path=str(Path("imports") / stored_name),
                    original_name=upload.filename,
                    author_id=author_id,
                )
        except ValidationError:
            # Rejected before a job row exists; keep no trace of the upload.
            stored_path.unlink(missing_ok=True)
            raise

    def run(
        self,
        kind: ImportKind,
        stream: Union[TextIO, BinaryIO],
        *,
        file_path: str,
        original_name: str,
        author_id: Optional[int] = None,
    ) -> ImportJob:
        spec = spec_for(kind)
        source = CsvRowSource(stream)

        missing = [c for c in spec.required if c not in source.parser.header]
        if missing:
            raise ValidationError(f"Missing required columns: {', '.join(missing)}")

        import_id = self._jobs.create_job(
            kind=kind,
            file_path=file_path,
            original_name=original_name,
            author_id=author_id,
            started_at=self._clock(),
        )
        logger.info("Import %s started: kind=%s file=%s", import_id, kind.value, original_name)

        total = 0
        success = 0
        errors: list[str] = []
        try:
            for row in source:
                total += 1
                try:
                    if row.error is not None:
                        raise RowError(row.error)
                    spec.store(self._mapper, self._targets, row.fields)
                except Exception as e:
                    # Any mapping or store failure is isolated to its row.
                    message = str(e) or type(e).__name__
                    errors.append(f"Row {row.line_number}: {message}")
                    logger.debug("Import %s row %d failed: %s", import_id, row.line_number, message)
                    continue
                success += 1
        except OSError:
            self._finalize(import_id, ImportStatus.FAILED, total=total, success=success, errors=errors)
            logger.exception("Import %s aborted after %d rows", import_id, total)
            raise

        self._finalize(import_id, ImportStatus.COMPLETED, total=total, success=success, errors=errors)
        if errors:
            logger.warning(
                "Import %s completed with errors: %d succeeded, %d failed", import_id, success, len(errors)
            )
        else:
            logger.info("Import %s completed: %d rows", import_id, success)

        return self.get_job(import_id)

    def _finalize(self, import_id: int, status: ImportStatus, *, total: int, success: int, errors: list[str]) -> None:
        self._jobs.finalize_job(
            import_id=import_id,
            status=status,
            total_rows=total,
            processed_rows=total,
            success_rows=success,
            error_rows=total - success,
            errors=errors,
            completed_at=self._clock(),
        )

from __future__ import annotations

import json
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import ImportKind, ImportStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_list
from .model import ImportJob
from .repository import ImportJobRepository

_SELECT = """
    SELECT import_id, import_type, file_path, original_name, status,
           total_rows, processed_rows, success_rows, error_rows, errors,
           started_at, completed_at, author_id
    FROM data_imports
"""


def _to_job(r: dict) -> ImportJob:
    return ImportJob(
        import_id=int(r["import_id"]),
        kind=ImportKind(r["import_type"]),
        file_path=r["file_path"],
        original_name=r["original_name"],
        status=ImportStatus(r["status"]),
        total_rows=int(r.get("total_rows") or 0),
        processed_rows=int(r.get("processed_rows") or 0),
        success_rows=int(r.get("success_rows") or 0),
        error_rows=int(r.get("error_rows") or 0),
        errors=load_json_list(r.get("errors")),
        started_at=r.get("started_at"),
        completed_at=r.get("completed_at"),
        author_id=r.get("author_id"),
    )


class MySQLImportJobRepository(ImportJobRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_job(
        self,
        *,
        kind: ImportKind,
        file_path: str,
        original_name: str,
        author_id: Optional[int],
        started_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO data_imports(import_type, file_path, original_name, status, started_at, author_id)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (kind.value, file_path, original_name, ImportStatus.PROCESSING.value, started_at, author_id),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE data_imports
                SET status=%s, total_rows=%s, processed_rows=%s, success_rows=%s,
                    error_rows=%s, errors=%s, completed_at=%s
                WHERE import_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(total_rows),
                    int(processed_rows),
                    int(success_rows),
                    int(error_rows),
                    json.dumps(list(errors)),
                    completed_at,
                    int(import_id),
                    ImportStatus.PROCESSING.value,
                ),
            )
            return cur.rowcount > 0

    def get_job(self, import_id: int) -> Optional[ImportJob]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE import_id=%s", (int(import_id),))
            r = fetchone(cur)
            return _to_job(r) if r else None

    def list_jobs(
        self,
        *,
        kind: Optional[ImportKind] = None,
        status: Optional[ImportStatus] = None,
        limit: int = 50,
    ) -> Sequence[ImportJob]:
        where = []
        params: list = []
        if kind:
            where.append("import_type=%s")
            params.append(kind.value)
        if status:
            where.append("status=%s")
            params.append(status.value)

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY import_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_job(r) for r in fetchall(cur)]

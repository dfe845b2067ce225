from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import WorkLogStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import WorkLog, WorkLogDraft, WorkLogExportRow
from .repository import WorkLogRepository


def _to_work_log(r: dict) -> WorkLog:
    return WorkLog(
        work_log_id=int(r["work_log_id"]),
        staff_member_id=int(r["staff_member_id"]),
        log_date=r["log_date"],
        status=WorkLogStatus(r["status"]),
        clock_in=normalize_mysql_time(r.get("clock_in")),
        clock_out=normalize_mysql_time(r.get("clock_out")),
        late_minutes=int(r.get("late_minutes") or 0),
        early_leave_minutes=int(r.get("early_leave_minutes") or 0),
        overtime_minutes=int(r.get("overtime_minutes") or 0),
    )


class MySQLWorkLogRepository(WorkLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_staff_and_date(self, staff_member_id: int, log_date: date) -> Optional[WorkLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT work_log_id, staff_member_id, log_date, status, clock_in, clock_out,
                       late_minutes, early_leave_minutes, overtime_minutes
                FROM work_logs
                WHERE staff_member_id=%s AND log_date=%s
                """,
                (int(staff_member_id), log_date),
            )
            r = fetchone(cur)
            return _to_work_log(r) if r else None

    def upsert(self, draft: WorkLogDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_logs(staff_member_id, log_date, status, clock_in, clock_out)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    work_log_id=LAST_INSERT_ID(work_log_id),
                    status=VALUES(status),
                    clock_in=VALUES(clock_in),
                    clock_out=VALUES(clock_out)
                """,
                (
                    int(draft.staff_member_id),
                    draft.log_date,
                    draft.status.value,
                    draft.clock_in,
                    draft.clock_out,
                ),
            )
            return int(cur.lastrowid)

    def list_for_staff(self, *, staff_member_id: int, start_date: date, end_date: date) -> Sequence[WorkLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT work_log_id, staff_member_id, log_date, status, clock_in, clock_out,
                       late_minutes, early_leave_minutes, overtime_minutes
                FROM work_logs
                WHERE staff_member_id=%s AND log_date BETWEEN %s AND %s
                ORDER BY log_date
                """,
                (int(staff_member_id), start_date, end_date),
            )
            return [_to_work_log(r) for r in fetchall(cur)]

    def get_export_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        staff_member_id: Optional[int] = None,
    ) -> Sequence[WorkLogExportRow]:
        sql = """
            SELECT s.staff_code, CONCAT_WS(' ', s.first_name, s.last_name) AS staff_name,
                   w.log_date, w.status, w.clock_in, w.clock_out,
                   w.late_minutes, w.overtime_minutes, w.early_leave_minutes
            FROM work_logs w
            JOIN staff_members s ON s.staff_member_id = w.staff_member_id
            WHERE w.log_date BETWEEN %s AND %s
        """
        params: list = [start_date, end_date]
        if staff_member_id:
            sql += " AND w.staff_member_id=%s"
            params.append(int(staff_member_id))
        sql += " ORDER BY w.log_date, s.staff_code"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                WorkLogExportRow(
                    staff_code=r["staff_code"] or "",
                    staff_name=r["staff_name"] or "",
                    log_date=r["log_date"],
                    status=WorkLogStatus(r["status"]),
                    clock_in=normalize_mysql_time(r.get("clock_in")),
                    clock_out=normalize_mysql_time(r.get("clock_out")),
                    late_minutes=int(r.get("late_minutes") or 0),
                    overtime_minutes=int(r.get("overtime_minutes") or 0),
                    early_leave_minutes=int(r.get("early_leave_minutes") or 0),
                )
                for r in fetchall(cur)
            ]

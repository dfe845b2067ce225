from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import ApprovalStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import TimeOffCategory, TimeOffRequest
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_categories(self, *, active_only: bool = True) -> Sequence[TimeOffCategory]:
        sql = """
            SELECT category_id, title, annual_quota, is_active,
                   is_carry_forward_allowed, max_carry_forward_days
            FROM time_off_categories
        """
        if active_only:
            sql += " WHERE is_active=1"
        sql += " ORDER BY category_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql)
            return [
                TimeOffCategory(
                    category_id=int(r["category_id"]),
                    title=r["title"],
                    annual_quota=int(r.get("annual_quota") or 0),
                    is_active=bool(r["is_active"]),
                    is_carry_forward_allowed=bool(r.get("is_carry_forward_allowed")),
                    max_carry_forward_days=int(r.get("max_carry_forward_days") or 0),
                )
                for r in fetchall(cur)
            ]

    def list_requests(
        self,
        *,
        year: int,
        month: Optional[int] = None,
        category_id: Optional[int] = None,
        staff_member_id: Optional[int] = None,
        approval_status: Optional[ApprovalStatus] = None,
    ) -> Sequence[TimeOffRequest]:
        sql = """
            SELECT r.request_id, r.staff_member_id, r.category_id, r.start_date, r.end_date,
                   r.total_days, r.approval_status, r.reason,
                   s.staff_code, CONCAT_WS(' ', s.first_name, s.last_name) AS staff_name,
                   c.title AS category_title
            FROM time_off_requests r
            JOIN staff_members s ON s.staff_member_id = r.staff_member_id
            LEFT JOIN time_off_categories c ON c.category_id = r.category_id
            WHERE YEAR(r.start_date)=%s
        """
        params: list = [int(year)]
        if month:
            sql += " AND MONTH(r.start_date)=%s"
            params.append(int(month))
        if category_id:
            sql += " AND r.category_id=%s"
            params.append(int(category_id))
        if staff_member_id:
            sql += " AND r.staff_member_id=%s"
            params.append(int(staff_member_id))
        if approval_status:
            sql += " AND r.approval_status=%s"
            params.append(approval_status.value)
        sql += " ORDER BY r.start_date, r.request_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                TimeOffRequest(
                    request_id=int(r["request_id"]),
                    staff_member_id=int(r["staff_member_id"]),
                    category_id=int(r["category_id"]),
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    total_days=Decimal(r.get("total_days") or 0),
                    approval_status=ApprovalStatus(r["approval_status"]),
                    reason=r.get("reason"),
                    staff_code=r.get("staff_code"),
                    staff_name=r.get("staff_name"),
                    category_title=r.get("category_title"),
                )
                for r in fetchall(cur)
            ]

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import SalarySlip
from .repository import SalarySlipRepository


class MySQLSalarySlipRepository(SalarySlipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_period(
        self,
        salary_period: str,
        *,
        staff_member_id: Optional[int] = None,
        office_location_id: Optional[int] = None,
        division_id: Optional[int] = None,
    ) -> Sequence[SalarySlip]:
        sql = """
            SELECT p.slip_reference, p.salary_period, p.staff_member_id, s.staff_code,
                   CONCAT_WS(' ', s.first_name, s.last_name) AS staff_name,
                   s.office_location_id, s.division_id, d.title AS division_name,
                   p.basic_salary, p.total_earnings, p.total_deductions, p.net_payable, p.status
            FROM salary_slips p
            LEFT JOIN staff_members s ON s.staff_member_id = p.staff_member_id
            LEFT JOIN divisions d ON d.division_id = s.division_id
            WHERE p.salary_period=%s
        """
        params: list = [salary_period]
        if staff_member_id:
            sql += " AND p.staff_member_id=%s"
            params.append(int(staff_member_id))
        if office_location_id:
            sql += " AND s.office_location_id=%s"
            params.append(int(office_location_id))
        if division_id:
            sql += " AND s.division_id=%s"
            params.append(int(division_id))
        sql += " ORDER BY p.slip_reference"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                SalarySlip(
                    slip_reference=r["slip_reference"],
                    salary_period=r["salary_period"],
                    staff_code=r.get("staff_code"),
                    staff_name=r.get("staff_name"),
                    division_name=r.get("division_name"),
                    basic_salary=Decimal(r.get("basic_salary") or 0),
                    total_earnings=Decimal(r.get("total_earnings") or 0),
                    total_deductions=Decimal(r.get("total_deductions") or 0),
                    net_payable=Decimal(r.get("net_payable") or 0),
                    status=r["status"],
                    staff_member_id=r.get("staff_member_id"),
                    office_location_id=r.get("office_location_id"),
                    division_id=r.get("division_id"),
                )
                for r in fetchall(cur)
            ]

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.constants import DEFAULT_STAFF_CODE_PREFIX, STAFF_CODE_DIGITS
from ..core.enums import EmploymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import StaffMember, StaffRecord
from .repository import StaffRepository

_SELECT = """
    SELECT s.staff_member_id, s.staff_code, s.first_name, s.last_name,
           s.personal_email, s.phone_number, s.date_of_birth, s.gender,
           s.hire_date, s.base_salary, s.employment_status,
           s.office_location_id, s.division_id, s.job_title_id,
           ol.title AS office_location_name, d.title AS division_name, jt.title AS job_title_name
    FROM staff_members s
    LEFT JOIN office_locations ol ON ol.office_location_id = s.office_location_id
    LEFT JOIN divisions d ON d.division_id = s.division_id
    LEFT JOIN job_titles jt ON jt.job_title_id = s.job_title_id
"""


def _to_member(r: dict) -> StaffMember:
    return StaffMember(
        staff_member_id=int(r["staff_member_id"]),
        staff_code=r["staff_code"] or "",
        first_name=r["first_name"],
        last_name=r["last_name"] or "",
        personal_email=r.get("personal_email"),
        phone_number=r.get("phone_number"),
        date_of_birth=r.get("date_of_birth"),
        gender=r.get("gender"),
        hire_date=r.get("hire_date"),
        base_salary=Decimal(r.get("base_salary") or 0),
        employment_status=EmploymentStatus(r["employment_status"]),
        office_location_id=r.get("office_location_id"),
        division_id=r.get("division_id"),
        job_title_id=r.get("job_title_id"),
        office_location_name=r.get("office_location_name"),
        division_name=r.get("division_name"),
        job_title_name=r.get("job_title_name"),
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, staff_code_prefix: str = DEFAULT_STAFF_CODE_PREFIX):
        self._conn_factory = conn_factory
        self._prefix = staff_code_prefix

    def get_by_id(self, staff_member_id: int) -> Optional[StaffMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.staff_member_id=%s", (int(staff_member_id),))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def get_by_staff_code(self, staff_code: str) -> Optional[StaffMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.staff_code=%s", (staff_code,))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def create(self, record: StaffRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff_members(
                    first_name, last_name, personal_email, phone_number, date_of_birth,
                    gender, hire_date, base_salary, employment_status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.first_name,
                    record.last_name,
                    record.personal_email,
                    record.phone_number,
                    record.date_of_birth,
                    record.gender,
                    record.hire_date,
                    record.base_salary,
                    record.employment_status.value,
                ),
            )
            staff_member_id = int(cur.lastrowid)
            # Same transaction: the code is derived from the new id.
            cur.execute(
                "UPDATE staff_members SET staff_code=%s WHERE staff_member_id=%s",
                (f"{self._prefix}{staff_member_id:0{STAFF_CODE_DIGITS}d}", staff_member_id),
            )
            return staff_member_id

    def list_members(
        self,
        *,
        office_location_id: Optional[int] = None,
        division_id: Optional[int] = None,
        employment_status: Optional[EmploymentStatus] = None,
        staff_member_id: Optional[int] = None,
    ) -> Sequence[StaffMember]:
        where = []
        params: list = []
        if office_location_id:
            where.append("s.office_location_id=%s")
            params.append(int(office_location_id))
        if division_id:
            where.append("s.division_id=%s")
            params.append(int(division_id))
        if employment_status:
            where.append("s.employment_status=%s")
            params.append(employment_status.value)
        if staff_member_id:
            where.append("s.staff_member_id=%s")
            params.append(int(staff_member_id))

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY s.staff_member_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_member(r) for r in fetchall(cur)]

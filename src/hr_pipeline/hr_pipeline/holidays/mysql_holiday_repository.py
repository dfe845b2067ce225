from __future__ import annotations

from datetime import date
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import CompanyHoliday, HolidayDraft
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_date(self, holiday_date: date) -> Optional[CompanyHoliday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT holiday_id, title, holiday_date, is_optional FROM company_holidays WHERE holiday_date=%s",
                (holiday_date,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return CompanyHoliday(
                holiday_id=int(r["holiday_id"]),
                title=r["title"],
                holiday_date=r["holiday_date"],
                is_optional=bool(r["is_optional"]),
            )

    def upsert_by_date(self, draft: HolidayDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO company_holidays(title, holiday_date, is_optional)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    holiday_id=LAST_INSERT_ID(holiday_id),
                    title=VALUES(title),
                    is_optional=VALUES(is_optional)
                """,
                (draft.title, draft.holiday_date, 1 if draft.is_optional else 0),
            )
            return int(cur.lastrowid)

from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall
from .model import Holiday
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_between(self, *, start: date, end: date) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, holiday_name, holiday_date, holiday_type
                FROM holidays
                WHERE status=1 AND holiday_date BETWEEN %s AND %s
                ORDER BY holiday_date ASC
                """,
                (start, end),
            )
            return [
                Holiday(
                    holiday_id=int(r["id"]),
                    name=r["holiday_name"],
                    holiday_date=as_date(r["holiday_date"]),
                    holiday_type=r.get("holiday_type"),
                )
                for r in fetchall(cur)
            ]

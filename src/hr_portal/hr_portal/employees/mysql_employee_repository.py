from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchone
from .model import Employee
from .repository import EmployeeRepository

_SELECT = """
    SELECT emp_id, emp_name, professional_email, date_of_confirmation, reporting_manager
    FROM employee
"""


def _to_employee(r: dict) -> Employee:
    return Employee(
        emp_id=str(r["emp_id"]),
        emp_name=r.get("emp_name") or "",
        email=r.get("professional_email") or None,
        date_of_confirmation=as_date(r.get("date_of_confirmation")),
        reporting_manager=(str(r["reporting_manager"]) if r.get("reporting_manager") else None),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_emp_id(self, emp_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE emp_id=%s AND status=1 LIMIT 1", (str(emp_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_manager_of(self, emp_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT m.emp_id, m.emp_name, m.professional_email, m.date_of_confirmation, m.reporting_manager
                FROM employee e
                JOIN employee m ON m.emp_id = e.reporting_manager
                WHERE e.emp_id=%s
                LIMIT 1
                """,
                (str(emp_id),),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

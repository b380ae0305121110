from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import RemoteWorkStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone
from .model import ACTIVE, DELETED, RemoteWorkApplication
from .repository import RemoteWorkRepository

_COLUMNS = """
    id, emp_id, employee_name, from_date, to_date, number_of_days, reason,
    approval_status, approved_by, approved_date, manager_id, status, application_date
"""

_APPROVED_FLAG = {
    RemoteWorkStatus.PENDING: 0,
    RemoteWorkStatus.APPROVED: 1,
    RemoteWorkStatus.REJECTED: 2,
}


def _to_application(r: dict) -> RemoteWorkApplication:
    return RemoteWorkApplication(
        application_id=int(r["id"]),
        emp_id=str(r["emp_id"]),
        employee_name=r.get("employee_name") or "",
        from_date=as_date(r["from_date"]),
        to_date=as_date(r["to_date"]),
        number_of_days=int(r["number_of_days"] or 0),
        reason=r.get("reason"),
        approval_status=RemoteWorkStatus(r["approval_status"]),
        approved_by=r.get("approved_by"),
        approved_date=r.get("approved_date"),
        manager_id=(str(r["manager_id"]) if r.get("manager_id") else None),
        status=int(r["status"]),
        application_date=r.get("application_date"),
    )


class MySQLRemoteWorkRepository(RemoteWorkRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        emp_id: str,
        employee_name: str,
        from_date: date,
        to_date: date,
        number_of_days: int,
        reason: Optional[str],
        manager_id: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO remote_application(
                    emp_id, employee_name, from_date, to_date, number_of_days, reason,
                    manager_id, approval_status, approved, status, application_date
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,NOW())
                """,
                (
                    str(emp_id),
                    employee_name,
                    from_date,
                    to_date,
                    int(number_of_days),
                    reason,
                    manager_id,
                    RemoteWorkStatus.PENDING.value,
                    0,
                    ACTIVE,
                ),
            )
            return int(cur.lastrowid)

    def get(self, application_id: int) -> Optional[RemoteWorkApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM remote_application WHERE id=%s", (int(application_id),))
            r = fetchone(cur)
            return _to_application(r) if r else None

    def list_applications(self, *, emp_id: Optional[str] = None, pending_only: bool = False) -> Sequence[RemoteWorkApplication]:
        clauses = ["status=%s"]
        params: list[object] = [ACTIVE]

        if emp_id is not None:
            clauses.append("emp_id=%s")
            params.append(str(emp_id))
        if pending_only:
            clauses.append("approval_status=%s")
            params.append(RemoteWorkStatus.PENDING.value)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM remote_application WHERE {where} ORDER BY application_date DESC, id DESC",
                tuple(params),
            )
            return [_to_application(r) for r in fetchall(cur)]

    def sum_approved_days_since(self, *, emp_id: str, since: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(SUM(number_of_days), 0) AS used_days
                FROM remote_application
                WHERE emp_id=%s AND approval_status=%s AND status=%s AND from_date >= %s
                """,
                (str(emp_id), RemoteWorkStatus.APPROVED.value, ACTIVE, since),
            )
            r = fetchone(cur)
            return int(r["used_days"]) if r else 0

    def find_overlapping(self, *, emp_id: str, start: date, end: date) -> Sequence[RemoteWorkApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM remote_application
                WHERE emp_id=%s AND status=%s AND from_date <= %s AND to_date >= %s
                """,
                (str(emp_id), ACTIVE, end, start),
            )
            return [_to_application(r) for r in fetchall(cur)]

    def decide(self, *, application_id: int, status: RemoteWorkStatus, decided_by: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE remote_application
                SET approval_status=%s, approved=%s, approved_by=%s, approved_date=NOW()
                WHERE id=%s AND approval_status=%s AND status=%s
                """,
                (
                    status.value,
                    _APPROVED_FLAG[status],
                    decided_by,
                    int(application_id),
                    RemoteWorkStatus.PENDING.value,
                    ACTIVE,
                ),
            )
            return cur.rowcount > 0

    def soft_delete(self, application_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE remote_application SET status=%s WHERE id=%s AND status=%s",
                (DELETED, int(application_id), ACTIVE),
            )
            return cur.rowcount > 0

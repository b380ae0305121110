from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import ApprovalStage
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone
from .model import LeaveApplication, LeaveType
from .repository import LeaveRepository

_SELECT = """
    SELECT
        la.id, la.emp_id, e.emp_name AS employee_name, la.leave_type, lt.leave_type_name,
        la.leave_day_type, la.reason, la.leave_address, la.approval_status_lm, la.approval_status,
        la.approved, la.status, la.application_date,
        lad.from_date, lad.to_date, lad.no_of_days
    FROM leave_application la
    JOIN employee e ON e.emp_id = la.emp_id
    LEFT JOIN leave_type lt ON lt.id = la.leave_type
    LEFT JOIN leave_application_data lad ON lad.leave_application_id = la.id
"""


def _to_leave(r: dict) -> LeaveApplication:
    return LeaveApplication(
        application_id=int(r["id"]),
        emp_id=str(r["emp_id"]),
        employee_name=r.get("employee_name") or "",
        leave_type_id=int(r["leave_type"]),
        leave_type_name=r.get("leave_type_name"),
        from_date=as_date(r["from_date"]),
        to_date=as_date(r["to_date"]),
        number_of_days=float(r["no_of_days"] or 0),
        reason=r.get("reason"),
        leave_address=r.get("leave_address"),
        leave_day_type=str(r.get("leave_day_type") or "1"),
        approval_status_manager=ApprovalStage(int(r["approval_status_lm"])),
        approval_status_hr=ApprovalStage(int(r["approval_status"])),
        final_approved=bool(r["approved"]),
        status=int(r["status"]),
        application_date=r.get("application_date"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_leave_type(self, leave_type_id: int) -> Optional[LeaveType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, leave_type_name FROM leave_type WHERE id=%s", (int(leave_type_id),))
            r = fetchone(cur)
            return LeaveType(leave_type_id=int(r["id"]), name=r["leave_type_name"]) if r else None

    def create(
        self,
        *,
        emp_id: str,
        leave_type_id: int,
        leave_day_type: str,
        from_date: date,
        to_date: date,
        number_of_days: float,
        reason: Optional[str],
        leave_address: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_application(
                    emp_id, leave_type, leave_day_type, reason, leave_address,
                    approval_status_lm, approval_status, approved, status, application_date
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,0,1,NOW())
                """,
                (
                    str(emp_id),
                    int(leave_type_id),
                    str(leave_day_type),
                    reason,
                    leave_address or "N/A",
                    int(ApprovalStage.PENDING),
                    int(ApprovalStage.PENDING),
                ),
            )
            leave_id = int(cur.lastrowid)
            cur.execute(
                """
                INSERT INTO leave_application_data(leave_application_id, from_date, to_date, no_of_days)
                VALUES(%s,%s,%s,%s)
                """,
                (leave_id, from_date, to_date, number_of_days),
            )
            return leave_id

    def get(self, application_id: int) -> Optional[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE la.id=%s LIMIT 1", (int(application_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_for_employee(self, *, emp_id: Optional[str] = None) -> Sequence[LeaveApplication]:
        where = " WHERE la.status=1"
        params: tuple = ()
        if emp_id is not None:
            where += " AND la.emp_id=%s"
            params = (str(emp_id),)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + where + " ORDER BY la.application_date DESC, la.id DESC", params)
            return [_to_leave(r) for r in fetchall(cur)]

    def decide_manager(self, *, application_id: int, stage: ApprovalStage) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leave_application SET approval_status_lm=%s WHERE id=%s AND approval_status_lm=%s",
                (int(stage), int(application_id), int(ApprovalStage.PENDING)),
            )
            return cur.rowcount > 0

    def decide_hr(self, *, application_id: int, stage: ApprovalStage) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_application
                SET approval_status=%s, approved=%s
                WHERE id=%s AND approval_status_lm=%s AND approval_status=%s
                """,
                (
                    int(stage),
                    1 if stage == ApprovalStage.APPROVED else 0,
                    int(application_id),
                    int(ApprovalStage.APPROVED),
                    int(ApprovalStage.PENDING),
                ),
            )
            return cur.rowcount > 0

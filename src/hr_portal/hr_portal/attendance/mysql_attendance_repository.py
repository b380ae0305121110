from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import PunchState
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import DeviceEmployee, PunchEvent
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # -------- Punch log --------
    def find_punch(self, *, user_id: str, state: PunchState, punch_time: datetime) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id
                FROM user_attendance
                WHERE user_id=%s AND state=%s AND punch_time=%s
                LIMIT 1
                """,
                (str(user_id), state.value, punch_time),
            )
            r = fetchone(cur)
            return int(r["id"]) if r else None

    def insert_punch(self, event: PunchEvent) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO user_attendance(user_id, state, punch_time, verify_mode, source)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (
                        event.employee_external_id,
                        event.state.value,
                        event.timestamp,
                        event.verify_mode,
                        event.source,
                    ),
                )
                return True
        except IntegrityError as e:
            if is_duplicate_key(e):
                return False
            raise

    def list_punches(self, *, user_id: str, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, state, punch_time, verify_mode, source
                FROM user_attendance
                WHERE user_id=%s AND punch_time >= %s AND punch_time < %s
                ORDER BY punch_time ASC
                """,
                (str(user_id), start, end),
            )
            return [
                PunchEvent(
                    employee_external_id=str(r["user_id"]),
                    state=PunchState(r["state"]),
                    timestamp=r["punch_time"],
                    verify_mode=r.get("verify_mode"),
                    source=r.get("source") or "external_api",
                )
                for r in fetchall(cur)
            ]

    # -------- Device roster --------
    def get_device_employee(self, pin_auto: str) -> Optional[DeviceEmployee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT pin_auto, pin_manual, user_name, password, privilege
                FROM external_employees
                WHERE pin_auto=%s
                """,
                (str(pin_auto),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return DeviceEmployee(
                pin_auto=str(r["pin_auto"]),
                pin_manual=r.get("pin_manual"),
                user_name=r.get("user_name") or "",
                password=r.get("password"),
                privilege=r.get("privilege"),
            )

    def create_device_employee(self, employee: DeviceEmployee) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO external_employees(pin_auto, pin_manual, user_name, password, privilege)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (employee.pin_auto, employee.pin_manual, employee.user_name, employee.password, employee.privilege),
            )
            return int(cur.lastrowid)

    def update_device_employee(self, employee: DeviceEmployee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE external_employees
                SET pin_manual=%s, user_name=%s, password=%s, privilege=%s
                WHERE pin_auto=%s
                """,
                (employee.pin_manual, employee.user_name, employee.password, employee.privilege, employee.pin_auto),
            )
            return True

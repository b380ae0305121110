from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchState
from .model import DeviceEmployee, PunchEvent


class AttendanceRepository(Protocol):
    """Append-only punch log plus the device roster."""

    def find_punch(self, *, user_id: str, state: PunchState, punch_time: datetime) -> Optional[int]:
        raise NotImplementedError

    def insert_punch(self, event: PunchEvent) -> bool:
        """Insert one punch. Returns False if the store already holds the dedup triple."""

        raise NotImplementedError

    def list_punches(self, *, user_id: str, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        """Punches with start <= punch_time < end, ordered by punch_time."""

        raise NotImplementedError

    # Device roster
    def get_device_employee(self, pin_auto: str) -> Optional[DeviceEmployee]:
        raise NotImplementedError

    def create_device_employee(self, employee: DeviceEmployee) -> int:
        raise NotImplementedError

    def update_device_employee(self, employee: DeviceEmployee) -> bool:
        raise NotImplementedError

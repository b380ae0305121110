from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import DayStatus, PunchState


@dataclass(frozen=True)
class PunchEvent:
    """A single device punch. Identity is (employee_external_id, state, timestamp)."""

    employee_external_id: str
    state: PunchState
    timestamp: datetime
    verify_mode: Optional[str] = None
    source: str = "external_api"

    @property
    def dedup_key(self) -> tuple[str, PunchState, datetime]:
        return (self.employee_external_id, self.state, self.timestamp)


@dataclass(frozen=True)
class PunchLogBatch:
    """Punch rows fetched for a date range. `rejected` counts rows that could not be parsed."""

    events: tuple[PunchEvent, ...]
    rejected: int = 0

    @property
    def received(self) -> int:
        return len(self.events) + self.rejected


@dataclass(frozen=True)
class DeviceEmployee:
    """Roster entry of the attendance device (keyed by pin_auto)."""

    pin_auto: str
    pin_manual: Optional[str]
    user_name: str
    password: Optional[str] = None
    privilege: Optional[str] = None


@dataclass(frozen=True)
class ReconcileResult:
    inserted_count: int
    skipped_count: int

    @property
    def total(self) -> int:
        return self.inserted_count + self.skipped_count


@dataclass(frozen=True)
class RosterSyncResult:
    synced: int
    updated: int
    total: int


@dataclass(frozen=True)
class DaySummary:
    """Read-model for one calendar day of the monthly attendance view."""

    date: date
    time_in: str
    time_out: str
    hours: str
    status: DayStatus
    worked_minutes: int = 0
    in_month: bool = True

    def to_dict(self) -> dict:
        return {
            "date": self.date.strftime("%Y-%m-%d"),
            "weekday": self.date.strftime("%A").lower(),
            "timeIn": self.time_in,
            "timeOut": self.time_out,
            "hours": self.hours,
            "status": self.status.value,
            "inMonth": self.in_month,
        }


@dataclass(frozen=True)
class WeekSummary:
    week_number: int
    days: tuple[DaySummary, ...]
    total_minutes: int
    total_hours: str

    def to_dict(self) -> dict:
        return {
            "weekNumber": self.week_number,
            "days": [d.to_dict() for d in self.days],
            "totalHours": self.total_hours,
        }

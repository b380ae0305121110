from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Iterable


@dataclass(frozen=True)
class OfficeWindow:
    start: time
    end: time
    works_weekends: bool = False
    name: str = "standard"

    @property
    def start_hour(self) -> int:
        return self.start.hour

    @property
    def start_minute(self) -> int:
        return self.start.minute

    @property
    def end_hour(self) -> int:
        return self.end.hour

    @property
    def end_minute(self) -> int:
        return self.end.minute

    @property
    def days_per_week(self) -> int:
        return 7 if self.works_weekends else 5


TEN_HOUR_WINDOW = OfficeWindow(start=time(8, 0), end=time(18, 0), name="ten_hour")
NINE_HOUR_WINDOW = OfficeWindow(start=time(9, 0), end=time(18, 0), works_weekends=True, name="nine_hour")
STANDARD_WINDOW = OfficeWindow(start=time(9, 0), end=time(17, 30), name="standard")


def _normalize_ids(ids: Iterable) -> frozenset[str]:
    return frozenset(str(i).strip() for i in ids if str(i).strip())


@dataclass(frozen=True)
class OfficeHoursPolicy:
    """Chooses the office window per employee from static tier lists.

    Built once from configuration; the tier lists never change at runtime.
    """

    ten_hour_ids: frozenset[str] = field(default_factory=frozenset)
    nine_hour_ids: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_lists(cls, *, ten_hour: Iterable = (), nine_hour: Iterable = ()) -> "OfficeHoursPolicy":
        return cls(ten_hour_ids=_normalize_ids(ten_hour), nine_hour_ids=_normalize_ids(nine_hour))

    def window_for(self, employee_id) -> OfficeWindow:
        key = str(employee_id).strip()
        if key in self.ten_hour_ids:
            return TEN_HOUR_WINDOW
        if key in self.nine_hour_ids:
            return NINE_HOUR_WINDOW
        return STANDARD_WINDOW


def clipped_hours(check_in: datetime, check_out: datetime, window: OfficeWindow) -> float:
    """Hours worked inside the office window of check_in's day.

    Arrivals before the window count from its start, departures after it count
    until its end. Returns 0.0 when nothing of the stay falls inside.
    """
    day = check_in.date()
    window_start = datetime.combine(day, window.start)
    window_end = datetime.combine(day, window.end)

    start = max(check_in, window_start)
    end = min(check_out, window_end)
    if end <= start:
        return 0.0
    return (end - start).total_seconds() / 3600.0

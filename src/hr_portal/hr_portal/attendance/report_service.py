from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from ..holidays.repository import HolidayRepository
from .model import WeekSummary
from .repository import AttendanceRepository
from .summary import MonthlySummaryBuilder, span_of, week_starts


class AttendanceReportService:
    """Read-only reporting over the stored punch log."""

    def __init__(self, attendance: AttendanceRepository, holidays: HolidayRepository, builder: MonthlySummaryBuilder):
        self._attendance = attendance
        self._holidays = holidays
        self._builder = builder

    def monthly_summary(
        self,
        *,
        employee_id: str,
        year: int,
        month: int,
        today: Optional[date] = None,
    ) -> list[WeekSummary]:
        if not str(employee_id or "").strip():
            raise ValidationError("Employee ID is required")
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")

        starts = week_starts(int(year), int(month))
        span_start, span_end = span_of(starts)

        punches = self._attendance.list_punches(user_id=str(employee_id), start=span_start, end=span_end)
        holidays = self._holidays.list_between(start=span_start.date(), end=span_end.date())

        return self._builder.build(punches, int(year), int(month), str(employee_id), holidays=holidays, today=today)

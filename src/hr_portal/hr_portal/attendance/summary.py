"""Monthly attendance view: calendar weeks of per-day first-in/last-out summaries."""
from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..core.enums import DayStatus
from ..holidays.model import Holiday
from .model import DaySummary, PunchEvent, WeekSummary
from .office_hours import OfficeHoursPolicy, OfficeWindow, clipped_hours

NO_TIME = "--"
MISSING_CHECKOUT = "N/A"


def format_minutes(total_minutes: int) -> str:
    hours, minutes = divmod(int(total_minutes), 60)
    return f"{hours}h {minutes}m" if minutes else f"{hours}h"


def week_starts(year: int, month: int) -> list[date]:
    """Mondays of every Monday-Sunday week that overlaps the month."""
    first, last = month_bounds(year, month)
    monday = first - timedelta(days=first.weekday())
    starts: list[date] = []
    while monday <= last:
        starts.append(monday)
        monday += timedelta(days=7)
    return starts


class MonthlySummaryBuilder:
    def __init__(self, policy: OfficeHoursPolicy):
        self._policy = policy

    def build(
        self,
        punches: Iterable[PunchEvent],
        year: int,
        month: int,
        employee_id: str,
        *,
        holidays: Sequence[Holiday] = (),
        today: Optional[date] = None,
    ) -> list[WeekSummary]:
        today = today or date.today()
        window = self._policy.window_for(employee_id)

        by_day: dict[date, list[PunchEvent]] = defaultdict(list)
        for p in punches:
            if str(p.employee_external_id) == str(employee_id):
                by_day[p.timestamp.date()].append(p)

        holiday_by_key = {h.day_key: h for h in holidays}

        weeks: list[WeekSummary] = []
        for index, monday in enumerate(week_starts(year, month), start=1):
            days = tuple(
                self._summarize_day(
                    monday + timedelta(days=offset),
                    by_day.get(monday + timedelta(days=offset), []),
                    window=window,
                    holiday_by_key=holiday_by_key,
                    today=today,
                    month=(year, month),
                )
                for offset in range(window.days_per_week)
            )
            total = sum(d.worked_minutes for d in days)
            weeks.append(WeekSummary(week_number=index, days=days, total_minutes=total, total_hours=format_minutes(total)))
        return weeks

    def _summarize_day(
        self,
        day: date,
        events: list[PunchEvent],
        *,
        window: OfficeWindow,
        holiday_by_key: dict,
        today: date,
        month: tuple[int, int],
    ) -> DaySummary:
        in_month = (day.year, day.month) == month

        if day > today:
            return DaySummary(day, NO_TIME, NO_TIME, format_minutes(0), DayStatus.FUTURE, in_month=in_month)

        if events:
            ordered = sorted(events, key=lambda e: e.timestamp)
            first = ordered[0].timestamp
            time_in = first.strftime("%H:%M")
            if len(ordered) < 2:
                # Single punch: incomplete day, shown as present with no hours.
                return DaySummary(day, time_in, MISSING_CHECKOUT, format_minutes(0), DayStatus.PRESENT, in_month=in_month)

            last = ordered[-1].timestamp
            minutes = int(round(clipped_hours(first, last, window) * 60))
            return DaySummary(
                day,
                time_in,
                last.strftime("%H:%M"),
                format_minutes(minutes),
                DayStatus.PRESENT,
                worked_minutes=minutes,
                in_month=in_month,
            )

        holiday = holiday_by_key.get((day.year, day.month, day.day))
        if holiday:
            return DaySummary(day, NO_TIME, NO_TIME, holiday.name, DayStatus.HOLIDAY, in_month=in_month)

        return DaySummary(day, NO_TIME, NO_TIME, format_minutes(0), DayStatus.ABSENT, in_month=in_month)


def span_of(weeks_start: Sequence[date]) -> tuple[datetime, datetime]:
    """Datetime range [start, end) covering the given weeks."""
    start = datetime.combine(weeks_start[0], datetime.min.time())
    end = datetime.combine(weeks_start[-1] + timedelta(days=7), datetime.min.time())
    return start, end

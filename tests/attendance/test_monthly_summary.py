from __future__ import annotations

from datetime import date, datetime

import pytest

from src.hr_portal.hr_portal.attendance.model import PunchEvent
from src.hr_portal.hr_portal.attendance.office_hours import OfficeHoursPolicy
from src.hr_portal.hr_portal.attendance.report_service import AttendanceReportService
from src.hr_portal.hr_portal.attendance.summary import MonthlySummaryBuilder, format_minutes, week_starts
from src.hr_portal.hr_portal.core.enums import DayStatus, PunchState
from src.hr_portal.hr_portal.core.exceptions import ValidationError
from src.hr_portal.hr_portal.holidays.model import Holiday


def _builder() -> MonthlySummaryBuilder:
    return MonthlySummaryBuilder(OfficeHoursPolicy.from_lists(ten_hour=["13"], nine_hour=["16"]))


def _punch(ts: datetime, user="777", state=PunchState.CHECK_IN) -> PunchEvent:
    return PunchEvent(employee_external_id=user, state=state, timestamp=ts)


def _day(weeks, d: date):
    for week in weeks:
        for day in week.days:
            if day.date == d:
                return day
    raise AssertionError(f"{d} not in summary")


@pytest.mark.parametrize(
    "year,month,expected_mondays",
    [
        # starts on a Sunday: the week holding the 1st begins in May
        (2025, 6, [date(2025, 5, 26), date(2025, 6, 2), date(2025, 6, 9), date(2025, 6, 16), date(2025, 6, 23), date(2025, 6, 30)]),
        # exactly four full Monday-Sunday weeks
        (2021, 2, [date(2021, 2, 1), date(2021, 2, 8), date(2021, 2, 15), date(2021, 2, 22)]),
        # ends on a Monday
        (2025, 3, [date(2025, 2, 24), date(2025, 3, 3), date(2025, 3, 10), date(2025, 3, 17), date(2025, 3, 24), date(2025, 3, 31)]),
    ],
)
def test_week_starts_cover_every_week_touching_the_month(year, month, expected_mondays):
    assert week_starts(year, month) == expected_mondays


def test_single_punch_day_is_present_without_hours():
    weeks = _builder().build([_punch(datetime(2025, 3, 10, 9, 5))], 2025, 3, "777", today=date(2025, 3, 31))

    day = _day(weeks, date(2025, 3, 10))
    assert day.status == DayStatus.PRESENT
    assert day.time_in == "09:05"
    assert day.time_out == "N/A"
    assert day.hours == "0h"
    assert day.worked_minutes == 0


def test_first_and_last_punch_define_the_day_and_week_total_sums_minutes():
    punches = [
        _punch(datetime(2025, 3, 10, 18, 0), state=PunchState.CHECK_OUT),
        _punch(datetime(2025, 3, 10, 12, 0), state=PunchState.CHECK_OUT),
        _punch(datetime(2025, 3, 10, 8, 30)),
        _punch(datetime(2025, 3, 11, 9, 0)),
        _punch(datetime(2025, 3, 11, 13, 0), state=PunchState.CHECK_OUT),
        _punch(datetime(2025, 3, 11, 10, 0), user="someone-else"),
    ]

    weeks = _builder().build(punches, 2025, 3, "777", today=date(2025, 3, 31))

    monday = _day(weeks, date(2025, 3, 10))
    assert (monday.time_in, monday.time_out, monday.hours) == ("08:30", "18:00", "8h 30m")
    tuesday = _day(weeks, date(2025, 3, 11))
    assert tuesday.hours == "4h"
    assert weeks[2].total_minutes == 750
    assert weeks[2].total_hours == "12h 30m"


def test_holiday_without_punches_shows_holiday_name():
    holidays = [Holiday(holiday_id=1, name="Pakistan Day", holiday_date=date(2025, 3, 24))]

    weeks = _builder().build([], 2025, 3, "777", holidays=holidays, today=date(2025, 3, 31))

    day = _day(weeks, date(2025, 3, 24))
    assert day.status == DayStatus.HOLIDAY
    assert day.hours == "Pakistan Day"
    assert _day(weeks, date(2025, 3, 25)).status == DayStatus.ABSENT


def test_days_after_today_are_future_even_with_punches():
    weeks = _builder().build(
        [_punch(datetime(2025, 3, 13, 9, 0)), _punch(datetime(2025, 3, 13, 17, 0))],
        2025,
        3,
        "777",
        today=date(2025, 3, 12),
    )

    day = _day(weeks, date(2025, 3, 13))
    assert day.status == DayStatus.FUTURE
    assert (day.time_in, day.time_out, day.hours) == ("--", "--", "0h")
    assert _day(weeks, date(2025, 3, 12)).status == DayStatus.ABSENT


def test_weekend_tier_gets_seven_day_weeks():
    weeks = _builder().build([], 2025, 3, "16", today=date(2025, 3, 31))
    assert all(len(w.days) == 7 for w in weeks)

    standard = _builder().build([], 2025, 3, "777", today=date(2025, 3, 31))
    assert all(len(w.days) == 5 for w in standard)
    assert standard[0].days[0].in_month is False


def test_ten_hour_tier_clips_at_eight():
    weeks = _builder().build(
        [_punch(datetime(2025, 3, 10, 7, 30), user="13"), _punch(datetime(2025, 3, 10, 18, 30), user="13")],
        2025,
        3,
        "13",
        today=date(2025, 3, 31),
    )
    assert _day(weeks, date(2025, 3, 10)).hours == "10h"


@pytest.mark.parametrize("minutes,text", [(0, "0h"), (60, "1h"), (510, "8h 30m"), (59, "0h 59m")])
def test_format_minutes(minutes, text):
    assert format_minutes(minutes) == text


class FakeAttendanceRepo:
    def __init__(self, punches):
        self._punches = punches
        self.queries = []

    def list_punches(self, *, user_id, start, end):
        self.queries.append((user_id, start, end))
        return [p for p in self._punches if p.employee_external_id == user_id and start <= p.timestamp < end]


class FakeHolidayRepo:
    def __init__(self, holidays):
        self._holidays = holidays
        self.queries = []

    def list_between(self, *, start, end):
        self.queries.append((start, end))
        return [h for h in self._holidays if start <= h.holiday_date <= end]


def test_report_service_reads_the_whole_week_span():
    attendance = FakeAttendanceRepo([_punch(datetime(2025, 2, 28, 9, 0)), _punch(datetime(2025, 2, 28, 17, 30))])
    holidays = FakeHolidayRepo([])
    service = AttendanceReportService(attendance, holidays, _builder())

    weeks = service.monthly_summary(employee_id="777", year=2025, month=3, today=date(2025, 3, 31))

    assert attendance.queries == [("777", datetime(2025, 2, 24), datetime(2025, 4, 7))]
    assert holidays.queries == [(date(2025, 2, 24), date(2025, 4, 7))]
    assert _day(weeks, date(2025, 2, 28)).hours == "8h 30m"


@pytest.mark.parametrize("month", [0, 13])
def test_report_service_rejects_month_out_of_range(month):
    service = AttendanceReportService(FakeAttendanceRepo([]), FakeHolidayRepo([]), _builder())
    with pytest.raises(ValidationError):
        service.monthly_summary(employee_id="777", year=2025, month=month)


def test_report_service_requires_employee():
    service = AttendanceReportService(FakeAttendanceRepo([]), FakeHolidayRepo([]), _builder())
    with pytest.raises(ValidationError):
        service.monthly_summary(employee_id="  ", year=2025, month=3)

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.hr_portal.hr_portal.common.datetime_utils import (
    format_upstream_date,
    inclusive_day_count,
    parse_punch_time,
    parse_upstream_date,
    subtract_months,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("2025-10-06 08:30:15", datetime(2025, 10, 6, 8, 30, 15)),
        ("2025-09-25 05:11:00 PM", datetime(2025, 9, 25, 17, 11, 0)),
        ("2025-09-25 12:05:00 AM", datetime(2025, 9, 25, 0, 5, 0)),
        ("2025-09-25T09:00:00", datetime(2025, 9, 25, 9, 0, 0)),
    ],
)
def test_parse_punch_time_formats(raw, expected):
    assert parse_punch_time(raw) == expected


@pytest.mark.parametrize(
    "raw,instant",
    [
        ("2025-09-25T09:00:00Z", datetime(2025, 9, 25, 9, 0, tzinfo=timezone.utc)),
        ("2025-09-25T14:00:00+05:00", datetime(2025, 9, 25, 9, 0, tzinfo=timezone.utc)),
        ("2025-09-25T01:30:00-04:00", datetime(2025, 9, 25, 5, 30, tzinfo=timezone.utc)),
    ],
)
def test_parse_punch_time_converts_offsets_to_local_wall_clock(raw, instant):
    parsed = parse_punch_time(raw)

    assert parsed.tzinfo is None
    assert parsed == instant.astimezone().replace(tzinfo=None)


def test_offset_values_for_the_same_instant_agree():
    utc = parse_punch_time("2025-09-25T09:00:00Z")
    karachi = parse_punch_time("2025-09-25T14:00:00+05:00")

    assert utc == karachi
    assert karachi - parse_punch_time("2025-09-25T08:00:00Z") == timedelta(hours=1)


def test_parse_punch_time_rejects_garbage():
    with pytest.raises(ValueError):
        parse_punch_time("yesterday")


def test_upstream_date_round_trip():
    assert format_upstream_date(date(2025, 3, 4)) == "04/03/2025"
    assert parse_upstream_date("04/03/2025") == date(2025, 3, 4)


@pytest.mark.parametrize(
    "day,months,expected",
    [
        (date(2025, 8, 31), 6, date(2025, 2, 28)),
        (date(2025, 3, 31), 1, date(2025, 2, 28)),
        (date(2024, 3, 31), 1, date(2024, 2, 29)),
        (date(2025, 1, 15), 1, date(2024, 12, 15)),
        (date(2025, 6, 10), 6, date(2024, 12, 10)),
    ],
)
def test_subtract_months_clamps_to_month_end(day, months, expected):
    assert subtract_months(day, months) == expected


def test_inclusive_day_count():
    assert inclusive_day_count(date(2025, 3, 10), date(2025, 3, 11)) == 2
    assert inclusive_day_count(date(2025, 3, 10), date(2025, 3, 10)) == 1

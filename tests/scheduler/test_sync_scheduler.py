from __future__ import annotations

from datetime import date, datetime

import pytest

from src.hr_portal.hr_portal.attendance.sync_service import SyncResult
from src.hr_portal.hr_portal.scheduler.service import (
    IN_PROGRESS_MESSAGE,
    JOB_ID,
    OUTSIDE_HOURS_MESSAGE,
    WEEKEND_MESSAGE,
    AttendanceSyncScheduler,
)

MONDAY_10AM = datetime(2025, 3, 10, 10, 0)
MONDAY_8AM = datetime(2025, 3, 10, 8, 59)
MONDAY_6PM = datetime(2025, 3, 10, 18, 0)
SATURDAY_NOON = datetime(2025, 3, 15, 12, 0)


class FakeSyncService:
    def __init__(self, result=None, error=None):
        self.calls: list[tuple[date, date]] = []
        self._result = result or SyncResult(synced=3, skipped=1, total=4)
        self._error = error

    def sync_punches(self, start_date, end_date):
        self.calls.append((start_date, end_date))
        if self._error:
            raise self._error
        return self._result


class FakeScheduler:
    def __init__(self):
        self.jobs: list[dict] = []
        self.started = False
        self.shutdown_calls = 0

    def add_job(self, func, trigger=None, **kwargs):
        self.jobs.append({"func": func, "trigger": trigger, **kwargs})

    def start(self):
        self.started = True

    def shutdown(self, wait=True):
        self.shutdown_calls += 1


class SchedulerFactory:
    def __init__(self):
        self.created: list[FakeScheduler] = []

    def __call__(self):
        scheduler = FakeScheduler()
        self.created.append(scheduler)
        return scheduler


def _scheduler(now, sync=None, factory=None, **kwargs):
    return AttendanceSyncScheduler(
        sync or FakeSyncService(),
        clock=lambda: now,
        scheduler_factory=factory or SchedulerFactory(),
        **kwargs,
    )


def test_tick_inside_window_syncs_today():
    sync = FakeSyncService()

    run = _scheduler(MONDAY_10AM, sync).tick()

    assert run.ran is True
    assert run.error is None
    assert run.result.synced == 3
    assert sync.calls == [(date(2025, 3, 10), date(2025, 3, 10))]


@pytest.mark.parametrize(
    "now, message",
    [
        (SATURDAY_NOON, WEEKEND_MESSAGE),
        (MONDAY_8AM, OUTSIDE_HOURS_MESSAGE),
        (MONDAY_6PM, OUTSIDE_HOURS_MESSAGE),
    ],
)
def test_tick_outside_window_does_not_call_device(now, message):
    sync = FakeSyncService()

    run = _scheduler(now, sync).tick()

    assert run.ran is False
    assert run.message == message
    assert sync.calls == []


def test_overlapping_run_is_skipped():
    sync = FakeSyncService()
    scheduler = _scheduler(MONDAY_10AM, sync)
    scheduler._sync_lock.acquire()
    try:
        assert scheduler.sync_in_progress is True
        run = scheduler.tick()
    finally:
        scheduler._sync_lock.release()

    assert run.ran is False
    assert run.message == IN_PROGRESS_MESSAGE
    assert sync.calls == []
    assert scheduler.sync_in_progress is False


def test_sync_failure_is_reported_not_raised():
    scheduler = _scheduler(MONDAY_10AM, FakeSyncService(error=RuntimeError("device offline")))

    run = scheduler.tick()

    assert run.ran is True
    assert run.error == "device offline"
    assert run.to_dict() == {"success": False, "message": "Sync failed", "error": "device offline"}
    assert scheduler.sync_in_progress is False


def test_start_is_idempotent_and_queues_initial_run_in_window():
    factory = SchedulerFactory()
    scheduler = _scheduler(MONDAY_10AM, factory=factory)

    assert scheduler.start() is True
    assert scheduler.start() is False

    assert len(factory.created) == 1
    fake = factory.created[0]
    assert fake.started is True
    hourly, initial = fake.jobs
    assert hourly["trigger"] == "cron"
    assert hourly["minute"] == 0
    assert hourly["id"] == JOB_ID
    assert initial["trigger"] is None
    assert scheduler.is_running is True


def test_start_outside_window_skips_initial_run():
    factory = SchedulerFactory()
    scheduler = _scheduler(SATURDAY_NOON, factory=factory)

    scheduler.start()

    assert [job["id"] for job in factory.created[0].jobs] == [JOB_ID]


def test_stop_shuts_down_once():
    factory = SchedulerFactory()
    scheduler = _scheduler(MONDAY_10AM, factory=factory, run_initial_sync=False)
    scheduler.start()

    assert scheduler.stop() is True
    assert scheduler.stop() is False
    assert factory.created[0].shutdown_calls == 1
    assert scheduler.is_running is False


def test_manual_trigger_reports_outcome():
    run = _scheduler(MONDAY_10AM).trigger()

    body = run.to_dict()
    assert body["success"] is True
    assert body["message"] == "Manual sync triggered"
    assert body["result"] == {"success": True, "synced": 3, "skipped": 1, "rejected": 0, "total": 4}


def test_manual_trigger_respects_working_hours():
    sync = FakeSyncService()

    run = _scheduler(MONDAY_6PM, sync).trigger()

    assert run.to_dict() == {"success": False, "message": OUTSIDE_HOURS_MESSAGE}
    assert sync.calls == []


def test_status_snapshot():
    scheduler = _scheduler(SATURDAY_NOON)

    assert scheduler.status() == {
        "isRunning": False,
        "isWeekday": False,
        "isWorkingHours": True,
        "currentTime": "2025-03-15T12:00:00",
        "syncInProgress": False,
    }

"""Hourly background attendance sync.

One APScheduler cron job fires at the top of every hour. A tick only reaches
the device API on Monday-Friday between 09:00 and 18:00, and never while a
previous run is still in progress.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler

from ..attendance.sync_service import AttendanceSyncService, SyncResult
from ..common.datetime_utils import now_local
from ..core.constants import SYNC_WORKDAY_END_HOUR, SYNC_WORKDAY_START_HOUR

logger = logging.getLogger(__name__)

JOB_ID = "attendance-hourly-sync"
WEEKEND_MESSAGE = "Today is weekend. Sync only runs Monday-Friday."
OUTSIDE_HOURS_MESSAGE = "Outside working hours (9 AM - 6 PM). Manual sync not allowed."
IN_PROGRESS_MESSAGE = "A sync is already in progress"


@dataclass(frozen=True)
class SyncRun:
    ran: bool
    result: Optional[SyncResult] = None
    error: Optional[str] = None
    message: Optional[str] = None

    def to_dict(self) -> dict:
        payload = {"success": self.ran and self.error is None, "message": self.message}
        if self.result is not None:
            payload["result"] = self.result.to_dict()
        if self.error:
            payload["error"] = self.error
        return payload


class AttendanceSyncScheduler:
    def __init__(
        self,
        sync_service: AttendanceSyncService,
        *,
        clock: Callable[[], datetime] = now_local,
        scheduler_factory: Optional[Callable[[], BackgroundScheduler]] = None,
        start_hour: int = SYNC_WORKDAY_START_HOUR,
        end_hour: int = SYNC_WORKDAY_END_HOUR,
        run_initial_sync: bool = True,
    ):
        self._sync_service = sync_service
        self._clock = clock
        self._scheduler_factory = scheduler_factory or self._default_scheduler
        self._start_hour = int(start_hour)
        self._end_hour = int(end_hour)
        self._run_initial_sync = run_initial_sync

        self._scheduler: Optional[BackgroundScheduler] = None
        self._state_lock = threading.Lock()
        self._sync_lock = threading.Lock()

    @staticmethod
    def _default_scheduler() -> BackgroundScheduler:
        return BackgroundScheduler(job_defaults={"coalesce": True, "max_instances": 1, "misfire_grace_time": 300})

    @property
    def is_running(self) -> bool:
        return self._scheduler is not None

    @property
    def sync_in_progress(self) -> bool:
        return self._sync_lock.locked()

    def is_weekday(self, now: Optional[datetime] = None) -> bool:
        return (now or self._clock()).weekday() < 5

    def is_working_hours(self, now: Optional[datetime] = None) -> bool:
        return self._start_hour <= (now or self._clock()).hour < self._end_hour

    def start(self) -> bool:
        """Start the hourly job. Returns False if it was already running."""

        with self._state_lock:
            if self._scheduler is not None:
                logger.info("Attendance sync scheduler already running")
                return False

            scheduler = self._scheduler_factory()
            scheduler.add_job(self.tick, "cron", minute=0, id=JOB_ID, replace_existing=True)
            scheduler.start()
            self._scheduler = scheduler

        logger.info("Attendance sync scheduler started (hourly, Mon-Fri %02d:00-%02d:00)", self._start_hour, self._end_hour)

        now = self._clock()
        if self._run_initial_sync and self.is_weekday(now) and self.is_working_hours(now):
            scheduler.add_job(self.tick, id=f"{JOB_ID}-initial")
        return True

    def stop(self) -> bool:
        with self._state_lock:
            if self._scheduler is None:
                return False
            scheduler, self._scheduler = self._scheduler, None

        scheduler.shutdown(wait=False)
        logger.info("Attendance sync scheduler stopped")
        return True

    def tick(self) -> SyncRun:
        """Scheduled entry point. Never raises."""

        now = self._clock()
        if not self.is_weekday(now):
            logger.info("Skipping attendance sync: weekend")
            return SyncRun(ran=False, message=WEEKEND_MESSAGE)
        if not self.is_working_hours(now):
            logger.info("Skipping attendance sync: outside working hours (%s)", now.strftime("%H:%M"))
            return SyncRun(ran=False, message=OUTSIDE_HOURS_MESSAGE)
        return self.run_sync(now.date())

    def trigger(self) -> SyncRun:
        """Manual trigger, gated like the hourly tick."""

        run = self.tick()
        if run.ran and run.error is None:
            return SyncRun(ran=True, result=run.result, message="Manual sync triggered")
        return run

    def run_sync(self, day: Optional[date] = None) -> SyncRun:
        if not self._sync_lock.acquire(blocking=False):
            logger.info("Skipping attendance sync: previous run still in progress")
            return SyncRun(ran=False, message=IN_PROGRESS_MESSAGE)

        day = day or self._clock().date()
        try:
            result = self._sync_service.sync_punches(day, day)
            logger.info(
                "Attendance sync for %s finished: %s new, %s skipped, %s fetched",
                day,
                result.synced,
                result.skipped,
                result.total,
            )
            return SyncRun(ran=True, result=result, message="Sync completed")
        except Exception as e:
            logger.exception("Attendance sync for %s failed", day)
            return SyncRun(ran=True, error=str(e), message="Sync failed")
        finally:
            self._sync_lock.release()

    def status(self) -> dict:
        now = self._clock()
        return {
            "isRunning": self.is_running,
            "isWeekday": self.is_weekday(now),
            "isWorkingHours": self.is_working_hours(now),
            "currentTime": now.isoformat(timespec="seconds"),
            "syncInProgress": self.sync_in_progress,
        }

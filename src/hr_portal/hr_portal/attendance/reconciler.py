from __future__ import annotations

import logging
from typing import Iterable

from .model import DeviceEmployee, PunchEvent, ReconcileResult, RosterSyncResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceReconciler:
    """Merges fetched punches into the punch log, at most once per dedup triple.

    Events are handled one at a time: lookup, then insert. The store's unique
    key on the triple backs this up when two runs race; a refused insert is
    counted as skipped. A failure on one event is logged and counted as
    skipped, and the rest of the batch still runs.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def reconcile(self, events: Iterable[PunchEvent]) -> ReconcileResult:
        inserted = 0
        skipped = 0

        for event in events:
            try:
                existing = self._attendance.find_punch(
                    user_id=event.employee_external_id,
                    state=event.state,
                    punch_time=event.timestamp,
                )
                if existing is not None:
                    skipped += 1
                    continue

                if self._attendance.insert_punch(event):
                    inserted += 1
                else:
                    skipped += 1
            except Exception:
                logger.exception(
                    "Failed to store punch user_id=%s state=%s punch_time=%s",
                    event.employee_external_id,
                    event.state.value,
                    event.timestamp,
                )
                skipped += 1

        logger.info("Reconciled punches: %d new, %d skipped", inserted, skipped)
        return ReconcileResult(inserted_count=inserted, skipped_count=skipped)

    def reconcile_roster(self, employees: Iterable[DeviceEmployee]) -> RosterSyncResult:
        synced = 0
        updated = 0
        total = 0

        for emp in employees:
            total += 1
            try:
                if self._attendance.get_device_employee(emp.pin_auto):
                    self._attendance.update_device_employee(emp)
                    updated += 1
                else:
                    self._attendance.create_device_employee(emp)
                    synced += 1
            except Exception:
                logger.exception("Failed to store device employee pin_auto=%s", emp.pin_auto)

        logger.info("Employee sync complete: %d new, %d updated", synced, updated)
        return RosterSyncResult(synced=synced, updated=updated, total=total)

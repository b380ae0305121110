from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from ..gateway.client import AttendanceGateway
from .model import RosterSyncResult
from .reconciler import AttendanceReconciler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncResult:
    synced: int
    skipped: int
    total: int
    rejected: int = 0

    def to_dict(self) -> dict:
        return {
            "success": True,
            "synced": self.synced,
            "skipped": self.skipped,
            "rejected": self.rejected,
            "total": self.total,
        }


class AttendanceSyncService:
    """Fetch from the device API, then persist through the reconciler.

    `total` is every row the device sent; rows it sent in an unreadable shape
    are reported as `rejected` and never stored. Gateway errors propagate to
    the caller (controller or scheduler), which decides how to report them.
    """

    def __init__(self, gateway: AttendanceGateway, reconciler: AttendanceReconciler):
        self._gateway = gateway
        self._reconciler = reconciler

    def sync_punches(self, start_date: date, end_date: date) -> SyncResult:
        logger.info("Starting attendance sync for %s..%s", start_date, end_date)
        batch = self._gateway.fetch_punch_logs(start_date, end_date)
        if batch.rejected:
            logger.warning("%d punch rows for %s..%s were rejected", batch.rejected, start_date, end_date)
        if not batch.events:
            return SyncResult(synced=0, skipped=0, total=batch.received, rejected=batch.rejected)

        result = self._reconciler.reconcile(batch.events)
        return SyncResult(
            synced=result.inserted_count,
            skipped=result.skipped_count,
            total=batch.received,
            rejected=batch.rejected,
        )

    def sync_employees(self) -> RosterSyncResult:
        return self._reconciler.reconcile_roster(self._gateway.fetch_employees())

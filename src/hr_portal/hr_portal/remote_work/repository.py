from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import RemoteWorkStatus
from .model import RemoteWorkApplication


class RemoteWorkRepository(Protocol):
    def create(
        self,
        *,
        emp_id: str,
        employee_name: str,
        from_date: date,
        to_date: date,
        number_of_days: int,
        reason: Optional[str],
        manager_id: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get(self, application_id: int) -> Optional[RemoteWorkApplication]:
        raise NotImplementedError

    def list_applications(self, *, emp_id: Optional[str] = None, pending_only: bool = False) -> Sequence[RemoteWorkApplication]:
        """Non-deleted applications, newest first."""

        raise NotImplementedError

    def sum_approved_days_since(self, *, emp_id: str, since: date) -> int:
        """Total number_of_days of approved, non-deleted applications with from_date >= since."""

        raise NotImplementedError

    def find_overlapping(self, *, emp_id: str, start: date, end: date) -> Sequence[RemoteWorkApplication]:
        """Non-deleted applications (any approval status) whose range intersects [start, end]."""

        raise NotImplementedError

    def decide(self, *, application_id: int, status: RemoteWorkStatus, decided_by: str) -> bool:
        """Conditional update: only succeeds while the application is still Pending."""

        raise NotImplementedError

    def soft_delete(self, application_id: int) -> bool:
        raise NotImplementedError

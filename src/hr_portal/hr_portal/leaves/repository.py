from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStage
from .model import LeaveApplication, LeaveType


class LeaveRepository(Protocol):
    def get_leave_type(self, leave_type_id: int) -> Optional[LeaveType]:
        raise NotImplementedError

    def create(
        self,
        *,
        emp_id: str,
        leave_type_id: int,
        leave_day_type: str,
        from_date: date,
        to_date: date,
        number_of_days: float,
        reason: Optional[str],
        leave_address: Optional[str],
    ) -> int:
        """Insert with both approval stages Pending."""

        raise NotImplementedError

    def get(self, application_id: int) -> Optional[LeaveApplication]:
        raise NotImplementedError

    def list_for_employee(self, *, emp_id: Optional[str] = None) -> Sequence[LeaveApplication]:
        raise NotImplementedError

    def decide_manager(self, *, application_id: int, stage: ApprovalStage) -> bool:
        """Conditional update: only while the manager stage is still Pending."""

        raise NotImplementedError

    def decide_hr(self, *, application_id: int, stage: ApprovalStage) -> bool:
        """Conditional update: only while the manager stage is Approved and the HR stage is Pending.

        An HR approval also sets the final approved flag.
        """

        raise NotImplementedError

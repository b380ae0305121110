from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ApprovalStage


@dataclass(frozen=True)
class LeaveType:
    leave_type_id: int
    name: str


@dataclass(frozen=True)
class LeaveApplication:
    """A leave request with its two approval stages.

    The manager stage must be APPROVED before the HR stage may move. The
    application is final only when HR approves.
    """

    application_id: int
    emp_id: str
    employee_name: str
    leave_type_id: int
    leave_type_name: Optional[str]
    from_date: date
    to_date: date
    number_of_days: float
    reason: Optional[str] = None
    leave_address: Optional[str] = None
    leave_day_type: str = "1"
    approval_status_manager: ApprovalStage = ApprovalStage.PENDING
    approval_status_hr: ApprovalStage = ApprovalStage.PENDING
    final_approved: bool = False
    status: int = 1
    application_date: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.application_id,
            "emp_id": self.emp_id,
            "employee_name": self.employee_name,
            "leave_type_id": self.leave_type_id,
            "leave_type_name": self.leave_type_name,
            "leave_day_type": self.leave_day_type,
            "from_date": self.from_date.strftime("%Y-%m-%d"),
            "to_date": self.to_date.strftime("%Y-%m-%d"),
            "no_of_days": self.number_of_days,
            "reason": self.reason,
            "leave_address": self.leave_address,
            "approval_status_lm": int(self.approval_status_manager),
            "approval_status": int(self.approval_status_hr),
            "approved": 1 if self.final_approved else 0,
            "status": self.status,
            "application_date": (
                self.application_date.strftime("%Y-%m-%d %H:%M:%S") if self.application_date else None
            ),
        }

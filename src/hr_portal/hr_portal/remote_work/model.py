from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RemoteWorkStatus

ACTIVE = 1
DELETED = -1


@dataclass(frozen=True)
class RemoteWorkApplication:
    application_id: int
    emp_id: str
    employee_name: str
    from_date: date
    to_date: date
    number_of_days: int
    reason: Optional[str]
    approval_status: RemoteWorkStatus
    approved_by: Optional[str] = None
    approved_date: Optional[datetime] = None
    manager_id: Optional[str] = None
    status: int = ACTIVE
    application_date: Optional[datetime] = None

    @property
    def approved(self) -> int:
        """Legacy 0/1/2 flag mirrored from approval_status."""
        return {
            RemoteWorkStatus.PENDING: 0,
            RemoteWorkStatus.APPROVED: 1,
            RemoteWorkStatus.REJECTED: 2,
        }[self.approval_status]

    def overlaps(self, start: date, end: date) -> bool:
        return self.from_date <= end and self.to_date >= start

    def to_dict(self) -> dict:
        return {
            "id": self.application_id,
            "emp_id": self.emp_id,
            "employee_name": self.employee_name,
            "from_date": self.from_date.strftime("%Y-%m-%d"),
            "to_date": self.to_date.strftime("%Y-%m-%d"),
            "number_of_days": self.number_of_days,
            "reason": self.reason,
            "approval_status": self.approval_status.value,
            "approved": self.approved,
            "approved_by": self.approved_by,
            "approved_date": self.approved_date.strftime("%Y-%m-%d %H:%M:%S") if self.approved_date else None,
            "manager_id": self.manager_id,
            "status": self.status,
            "application_date": (
                self.application_date.strftime("%Y-%m-%d %H:%M:%S") if self.application_date else None
            ),
        }


@dataclass(frozen=True)
class EligibilityResult:
    allowed: bool
    reason: str
    is_permanent: bool = True
    used_six_months: int = 0
    used_one_month: int = 0
    code: Optional[str] = None

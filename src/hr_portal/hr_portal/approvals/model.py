from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional
from urllib.parse import urlencode

from ..core.constants import APPROVAL_REDIRECT_PATH
from ..core.enums import ApplicationType


@dataclass(frozen=True)
class ApprovalSubject:
    """What the approval emails and redirects need to know about an application."""

    application_type: ApplicationType
    application_id: int
    emp_id: str
    employee_name: str
    employee_email: Optional[str]
    from_date: date
    to_date: date
    number_of_days: float
    reason: Optional[str] = None
    detail: Optional[str] = None
    manager_name: Optional[str] = None
    manager_email: Optional[str] = None
    application_date: Optional[datetime] = None

    @property
    def label(self) -> str:
        return "Leave" if self.application_type == ApplicationType.LEAVE else "Remote Work"


@dataclass(frozen=True)
class RedirectIntent:
    """Outcome of an email-link action, rendered as query parameters on the portal page."""

    success: bool
    message: str
    action: Optional[str] = None
    role: Optional[str] = None
    application_type: Optional[str] = None
    employee: Optional[str] = None

    @classmethod
    def error(cls, message: str) -> "RedirectIntent":
        return cls(success=False, message=message)

    def query(self) -> dict:
        params = {"notification": "success" if self.success else "error", "message": self.message}
        if self.success:
            params.update(
                {
                    "action": self.action,
                    "role": self.role,
                    "type": self.application_type,
                    "employee": self.employee,
                }
            )
        return {k: v for k, v in params.items() if v is not None}

    def to_url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}{APPROVAL_REDIRECT_PATH}?{urlencode(self.query())}"

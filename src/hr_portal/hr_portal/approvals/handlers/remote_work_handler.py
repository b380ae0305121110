from __future__ import annotations

from typing import Optional

from ...core.enums import ApplicationType, ApproverRole, RemoteWorkStatus
from ...employees.repository import EmployeeRepository
from ...remote_work.model import ACTIVE, RemoteWorkApplication
from ...remote_work.repository import RemoteWorkRepository
from ..model import ApprovalSubject
from .base import ApprovalHandler


class RemoteWorkApprovalHandler(ApprovalHandler):
    """Single decision stage: the first manager or HR action on a Pending application wins."""

    application_type = ApplicationType.REMOTE
    not_found_message = "Remote work application not found"

    def __init__(self, applications: RemoteWorkRepository, employees: EmployeeRepository):
        self._applications = applications
        self._employees = employees

    def fetch(self, application_id: int) -> Optional[RemoteWorkApplication]:
        application = self._applications.get(int(application_id))
        if application is None or application.status != ACTIVE:
            return None
        return application

    def to_subject(self, application: RemoteWorkApplication) -> ApprovalSubject:
        employee = self._employees.get_by_emp_id(application.emp_id)
        manager = self._employees.get_manager_of(application.emp_id)
        return ApprovalSubject(
            application_type=self.application_type,
            application_id=application.application_id,
            emp_id=application.emp_id,
            employee_name=application.employee_name,
            employee_email=employee.email if employee else None,
            from_date=application.from_date,
            to_date=application.to_date,
            number_of_days=application.number_of_days,
            reason=application.reason,
            manager_name=manager.emp_name if manager else None,
            manager_email=manager.email if manager else None,
            application_date=application.application_date,
        )

    def blocked_reason(self, application: RemoteWorkApplication, role: ApproverRole) -> Optional[str]:
        if application.approval_status != RemoteWorkStatus.PENDING:
            return f"This remote work application has already been {application.approval_status.value.lower()}"
        return None

    def apply(self, *, application_id: int, role: ApproverRole, approved: bool, decided_by: str) -> bool:
        status = RemoteWorkStatus.APPROVED if approved else RemoteWorkStatus.REJECTED
        return self._applications.decide(application_id=int(application_id), status=status, decided_by=decided_by)

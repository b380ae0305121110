from __future__ import annotations

from typing import Optional

from ...core.enums import ApplicationType, ApprovalStage, ApproverRole
from ...employees.repository import EmployeeRepository
from ...leaves.model import LeaveApplication
from ...leaves.repository import LeaveRepository
from ..model import ApprovalSubject
from .base import ApprovalHandler

MANAGER_REQUIRED = "Manager approval is required before HR can approve"
PROCESSED_BY_MANAGER = "This leave application has already been processed by the manager"
PROCESSED_BY_HR = "This leave application has already been processed by HR"


class LeaveApprovalHandler(ApprovalHandler):
    """Two stages: the reporting manager decides first, then HR."""

    application_type = ApplicationType.LEAVE
    not_found_message = "Leave application not found"

    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository):
        self._leaves = leaves
        self._employees = employees

    def fetch(self, application_id: int) -> Optional[LeaveApplication]:
        return self._leaves.get(int(application_id))

    def to_subject(self, application: LeaveApplication) -> ApprovalSubject:
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
            detail=application.leave_type_name,
            manager_name=manager.emp_name if manager else None,
            manager_email=manager.email if manager else None,
            application_date=application.application_date,
        )

    def blocked_reason(self, application: LeaveApplication, role: ApproverRole) -> Optional[str]:
        if role == ApproverRole.MANAGER:
            if application.approval_status_manager != ApprovalStage.PENDING:
                return PROCESSED_BY_MANAGER
            return None

        if application.approval_status_manager != ApprovalStage.APPROVED:
            return MANAGER_REQUIRED
        if application.approval_status_hr != ApprovalStage.PENDING:
            return PROCESSED_BY_HR
        return None

    def apply(self, *, application_id: int, role: ApproverRole, approved: bool, decided_by: str) -> bool:
        stage = ApprovalStage.APPROVED if approved else ApprovalStage.REJECTED
        if role == ApproverRole.MANAGER:
            return self._leaves.decide_manager(application_id=int(application_id), stage=stage)
        return self._leaves.decide_hr(application_id=int(application_id), stage=stage)

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import inclusive_day_count
from ..common.validators import optional_positive_int, require_date, require_date_range, require_non_empty
from ..core.enums import ApplicationType
from ..core.exceptions import EligibilityError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .eligibility import RemoteWorkEligibility
from .model import EligibilityResult, RemoteWorkApplication
from .repository import RemoteWorkRepository

logger = logging.getLogger(__name__)


class RemoteWorkService:
    def __init__(
        self,
        applications: RemoteWorkRepository,
        employees: EmployeeRepository,
        eligibility: RemoteWorkEligibility,
        workflow=None,
    ):
        self._applications = applications
        self._employees = employees
        self._eligibility = eligibility
        self._workflow = workflow

    @staticmethod
    def _requested_range(from_date: str, to_date: str, number_of_days) -> tuple[date, date, int]:
        start = require_date(from_date, "fromDate")
        end = require_date(to_date, "toDate")
        require_date_range(start, end)
        days = inclusive_day_count(start, end)
        # Quotas are charged from the range, never from a client-supplied count.
        claimed = optional_positive_int(number_of_days, "numberOfDays")
        if claimed is not None and claimed != days:
            raise ValidationError(f"numberOfDays must be {days} for {start.isoformat()} to {end.isoformat()}")
        return start, end, days

    def check_eligibility(
        self,
        *,
        emp_id: str,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        number_of_days=None,
        today: Optional[date] = None,
    ) -> EligibilityResult:
        emp_id = require_non_empty(emp_id, "Employee ID")
        start = end = None
        days = optional_positive_int(number_of_days, "numberOfDays") or 1
        if from_date and to_date:
            start, end, days = self._requested_range(from_date, to_date, number_of_days)
        return self._eligibility.can_apply(emp_id, days, start, end, today=today)

    def usage(self, result: EligibilityResult) -> dict:
        """Quota usage payload for the validation endpoint."""

        six_limit = self._eligibility.six_month_limit
        one_limit = self._eligibility.one_month_limit
        return {
            "sixMonths": {
                "used": result.used_six_months,
                "limit": six_limit,
                "remaining": max(0, six_limit - result.used_six_months),
            },
            "oneMonth": {
                "used": result.used_one_month,
                "limit": one_limit,
                "remaining": max(0, one_limit - result.used_one_month),
            },
        }

    def submit(
        self,
        *,
        emp_id: str,
        from_date: str,
        to_date: str,
        number_of_days=None,
        reason: Optional[str] = None,
        today: Optional[date] = None,
    ) -> int:
        """Create a Pending application and hand it to the approval workflow.

        Eligibility failures raise EligibilityError carrying the exact reason.
        """

        emp_id = require_non_empty(emp_id, "Employee ID")
        start, end, days = self._requested_range(from_date, to_date, number_of_days)

        result = self._eligibility.can_apply(emp_id, days, start, end, today=today)
        if not result.allowed:
            raise EligibilityError(result.reason, code=result.code or "not_allowed")

        employee = self._employees.get_by_emp_id(emp_id)
        if employee is None:
            raise NotFoundError("Employee not found")
        manager = self._employees.get_manager_of(emp_id)

        application_id = self._applications.create(
            emp_id=emp_id,
            employee_name=employee.emp_name,
            from_date=start,
            to_date=end,
            number_of_days=days,
            reason=(reason or "").strip() or None,
            manager_id=manager.emp_id if manager else None,
        )
        logger.info("Remote work application %s created for %s (%s..%s)", application_id, emp_id, start, end)

        if self._workflow is not None:
            self._workflow.submit(ApplicationType.REMOTE, application_id)
        return application_id

    def list_applications(self, *, emp_id: Optional[str] = None, pending_only: bool = False) -> Sequence[RemoteWorkApplication]:
        return self._applications.list_applications(emp_id=(emp_id or None), pending_only=pending_only)

    def delete(self, application_id) -> None:
        app_id = optional_positive_int(application_id, "Application ID")
        if app_id is None:
            require_non_empty(None, "Application ID")
        if not self._applications.soft_delete(app_id):
            raise NotFoundError("Remote work application not found")

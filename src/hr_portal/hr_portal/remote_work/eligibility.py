from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import subtract_months
from ..core.constants import REMOTE_WORK_ONE_MONTH_LIMIT, REMOTE_WORK_SIX_MONTH_LIMIT
from ..employees.repository import EmployeeRepository
from .model import EligibilityResult
from .repository import RemoteWorkRepository

REASON_NOT_FOUND = "Employee not found"
REASON_NOT_PERMANENT = "Only permanent employees can apply for remote work"
REASON_SIX_MONTH_LIMIT = f"You have reached the maximum limit of {REMOTE_WORK_SIX_MONTH_LIMIT} remote days in 6 months"
REASON_ONE_MONTH_LIMIT = f"You have reached the maximum limit of {REMOTE_WORK_ONE_MONTH_LIMIT} remote days in 1 month"
REASON_ALREADY_APPLIED = "You have already applied for remote work in this date range"
REASON_ALLOWED = "You can apply for remote work"


class RemoteWorkEligibility:
    """Read-only gate run before a remote-work application is created.

    Checks run in a fixed order and stop at the first failure: permanent
    status, 6-month quota, 1-month quota, overlapping ranges. Quotas count
    only approved days.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        applications: RemoteWorkRepository,
        *,
        six_month_limit: int = REMOTE_WORK_SIX_MONTH_LIMIT,
        one_month_limit: int = REMOTE_WORK_ONE_MONTH_LIMIT,
    ):
        self._employees = employees
        self._applications = applications
        self._six_month_limit = int(six_month_limit)
        self._one_month_limit = int(one_month_limit)

    @property
    def six_month_limit(self) -> int:
        return self._six_month_limit

    @property
    def one_month_limit(self) -> int:
        return self._one_month_limit

    def can_apply(
        self,
        emp_id: str,
        requested_days: int,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        *,
        today: Optional[date] = None,
    ) -> EligibilityResult:
        today = today or date.today()

        employee = self._employees.get_by_emp_id(emp_id)
        if employee is None:
            return EligibilityResult(allowed=False, reason=REASON_NOT_FOUND, is_permanent=False, code="not_found")
        if not employee.is_permanent:
            return EligibilityResult(allowed=False, reason=REASON_NOT_PERMANENT, is_permanent=False, code="not_permanent")

        used_six = self._applications.sum_approved_days_since(emp_id=emp_id, since=subtract_months(today, 6))
        used_one = self._applications.sum_approved_days_since(emp_id=emp_id, since=subtract_months(today, 1))
        usage = dict(used_six_months=used_six, used_one_month=used_one)

        if used_six + int(requested_days) > self._six_month_limit:
            return EligibilityResult(allowed=False, reason=REASON_SIX_MONTH_LIMIT, code="limit", **usage)
        if used_one + int(requested_days) > self._one_month_limit:
            return EligibilityResult(allowed=False, reason=REASON_ONE_MONTH_LIMIT, code="limit", **usage)

        if from_date is not None and to_date is not None:
            if self._applications.find_overlapping(emp_id=emp_id, start=from_date, end=to_date):
                return EligibilityResult(allowed=False, reason=REASON_ALREADY_APPLIED, code="overlap", **usage)

        return EligibilityResult(allowed=True, reason=REASON_ALLOWED, **usage)

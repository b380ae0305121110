from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import inclusive_day_count
from ..common.validators import optional_positive_int, require_date, require_date_range, require_non_empty
from ..core.enums import ApplicationType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeaveApplication
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_HALF_DAY_TYPES = {"0.5", "half"}


class LeaveService:
    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository, workflow=None):
        self._leaves = leaves
        self._employees = employees
        self._workflow = workflow

    def submit(
        self,
        *,
        emp_id: str,
        leave_type_id,
        from_date: str,
        to_date: str,
        number_of_days=None,
        leave_day_type: Optional[str] = None,
        reason: Optional[str] = None,
        leave_address: Optional[str] = None,
    ) -> int:
        emp_id = require_non_empty(emp_id, "Employee ID")
        type_id = optional_positive_int(leave_type_id, "leaveType")
        if type_id is None:
            raise ValidationError("leaveType is required")
        start = require_date(from_date, "fromDate")
        end = require_date(to_date, "toDate")
        require_date_range(start, end)

        if self._employees.get_by_emp_id(emp_id) is None:
            raise NotFoundError("Employee not found")
        if self._leaves.get_leave_type(type_id) is None:
            raise ValidationError("Unknown leave type")

        day_type = str(leave_day_type or "1").strip()
        if number_of_days in (None, ""):
            days = 0.5 if day_type in _HALF_DAY_TYPES else float(inclusive_day_count(start, end))
        else:
            try:
                days = float(number_of_days)
            except (TypeError, ValueError):
                raise ValidationError("numberOfDays must be a number")
            if days <= 0:
                raise ValidationError("numberOfDays must be greater than zero")

        application_id = self._leaves.create(
            emp_id=emp_id,
            leave_type_id=type_id,
            leave_day_type=day_type,
            from_date=start,
            to_date=end,
            number_of_days=days,
            reason=(reason or "").strip() or None,
            leave_address=(leave_address or "").strip() or None,
        )
        logger.info("Leave application %s created for %s (%s..%s)", application_id, emp_id, start, end)

        if self._workflow is not None:
            self._workflow.submit(ApplicationType.LEAVE, application_id)
        return application_id

    def list_applications(self, *, emp_id: Optional[str] = None) -> Sequence[LeaveApplication]:
        return self._leaves.list_for_employee(emp_id=(emp_id or None))

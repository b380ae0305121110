from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_emp_id(self, emp_id: str) -> Optional[Employee]:
        """Active employee by business id."""

        raise NotImplementedError

    def get_manager_of(self, emp_id: str) -> Optional[Employee]:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """The slice of an employee record the approval core needs."""

    emp_id: str
    emp_name: str
    email: Optional[str] = None
    date_of_confirmation: Optional[date] = None
    reporting_manager: Optional[str] = None

    @property
    def is_permanent(self) -> bool:
        return self.date_of_confirmation is not None

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Holiday:
    holiday_id: int
    name: str
    holiday_date: date
    holiday_type: Optional[str] = None

    @property
    def day_key(self) -> tuple[int, int, int]:
        """Calendar key used for matching; avoids comparing datetimes across zones."""
        return (self.holiday_date.year, self.holiday_date.month, self.holiday_date.day)

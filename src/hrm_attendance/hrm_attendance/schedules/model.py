from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class ShiftAssignment:
    """An employee's shift, effective over a date range (open-ended if no end)."""

    assignment_id: int
    employee_id: int
    shift_id: int
    effective_from: date
    effective_to: Optional[date] = None
    is_active: bool = True

    def covers(self, work_date: date) -> bool:
        if not self.is_active or work_date < self.effective_from:
            return False
        return self.effective_to is None or work_date <= self.effective_to

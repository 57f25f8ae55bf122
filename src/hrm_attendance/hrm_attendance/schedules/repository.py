from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import ShiftAssignment


class ShiftAssignmentRepository(Protocol):
    def get_active_for_employee(self, *, employee_id: int, work_date: date) -> Optional[ShiftAssignment]:
        """Latest active assignment whose effective range covers ``work_date``."""

        raise NotImplementedError

from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.logger import get_logger
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .repository import ShiftAssignmentRepository

logger = get_logger(__name__)


class ShiftResolver:
    """Finds the shift that applies to an employee on a given date.

    Order: active assignment covering the date, then the default shift.
    """

    def __init__(self, shifts: ShiftRepository, assignments: ShiftAssignmentRepository):
        self._shifts = shifts
        self._assignments = assignments

    def effective_shift(self, *, employee_id: int, work_date: date) -> Optional[Shift]:
        assignment = self._assignments.get_active_for_employee(employee_id=employee_id, work_date=work_date)
        if assignment and assignment.covers(work_date):
            shift = self._shifts.get_by_id(assignment.shift_id)
            if shift:
                return shift
            logger.warning(
                "Assignment %s points at missing shift %s; falling back to default shift",
                assignment.assignment_id,
                assignment.shift_id,
            )

        return self._shifts.get_default()

from __future__ import annotations

from typing import Optional

from ...core.constants import HALF_DAY_SPLIT_HOUR
from ...core.enums import AttendanceStatus, HalfDayType
from ..model import AttendanceDay
from .base import DayStatusStrategy, StatusDecision


class CompletedDayStrategy(DayStatusStrategy):
    """Full day >= full_day_hours, half day >= half_day_hours, otherwise absent."""

    def __init__(self, *, full_day_hours: float, half_day_hours: float):
        self.full_day_hours = float(full_day_hours)
        self.half_day_hours = float(half_day_hours)

    def decide(self, record: Optional[AttendanceDay]) -> StatusDecision:
        work_minutes = record.work_minutes if record else 0
        hours = round(work_minutes / 60, 2)

        if work_minutes >= self.full_day_hours * 60:
            return StatusDecision(
                status=AttendanceStatus.PRESENT,
                half_day_type=HalfDayType.FULL_DAY,
                reason=f"Worked {hours} hours (>= {self.full_day_hours:g} required for full day)",
            )

        if work_minutes >= self.half_day_hours * 60:
            first_half = record is not None and record.clock_in is not None and record.clock_in.hour < HALF_DAY_SPLIT_HOUR
            return StatusDecision(
                status=AttendanceStatus.HALF_DAY,
                half_day_type=HalfDayType.FIRST_HALF if first_half else HalfDayType.SECOND_HALF,
                reason=f"Worked {hours} hours (>= {self.half_day_hours:g} for half day, < {self.full_day_hours:g} for full day)",
            )

        return StatusDecision(
            status=AttendanceStatus.ABSENT,
            reason=f"Insufficient hours: {hours:.2f}/{self.half_day_hours:g} minimum required",
        )

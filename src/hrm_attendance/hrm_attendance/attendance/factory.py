from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import STANDARD_FULL_DAY_HOURS, STANDARD_HALF_DAY_HOURS
from ..shifts.model import Shift
from .model import AttendanceDay
from .strategies.absent_strategy import NoClockInStrategy, OrphanClockOutStrategy
from .strategies.base import DayStatusStrategy
from .strategies.correction_strategy import MissedClockOutStrategy
from .strategies.threshold_strategy import CompletedDayStrategy


@dataclass
class DayStatusStrategyFactory:
    """Factory Pattern: choose the closing strategy from the record's clock state."""

    standard_full_day_hours: float = STANDARD_FULL_DAY_HOURS
    standard_half_day_hours: float = STANDARD_HALF_DAY_HOURS

    def for_record(self, record: Optional[AttendanceDay], shift: Optional[Shift]) -> DayStatusStrategy:
        if record is None or (record.clock_in is None and record.clock_out is None):
            return NoClockInStrategy()
        if record.clock_in is None:
            return OrphanClockOutStrategy()
        if record.clock_out is None:
            return MissedClockOutStrategy()
        return self.for_completed_day(shift)

    def for_completed_day(self, shift: Optional[Shift]) -> CompletedDayStrategy:
        full = (shift.full_day_hours if shift else None) or self.standard_full_day_hours
        half = (shift.half_day_hours if shift else None) or self.standard_half_day_hours
        return CompletedDayStrategy(full_day_hours=full, half_day_hours=half)

from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import AttendanceDay
from .base import DayStatusStrategy, StatusDecision


class NoClockInStrategy(DayStatusStrategy):
    """Nobody clocked in for the day."""

    def decide(self, record: Optional[AttendanceDay]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT, reason="Auto marked absent (no clock-in)")


class OrphanClockOutStrategy(DayStatusStrategy):
    """A clock-out without a clock-in is bad data: absent, clock-out dropped."""

    def decide(self, record: Optional[AttendanceDay]) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.ABSENT,
            reason="Invalid record: clock-out without clock-in",
            clear_clock_out=True,
        )

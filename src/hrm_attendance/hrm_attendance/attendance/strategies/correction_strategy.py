from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import AttendanceDay
from .base import DayStatusStrategy, StatusDecision


class MissedClockOutStrategy(DayStatusStrategy):
    """Clocked in, never clocked out: park the day until HR corrects it."""

    def decide(self, record: Optional[AttendanceDay]) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.PENDING_CORRECTION,
            reason="Missed clock-out - requires correction",
        )

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus, HalfDayType
from ..model import AttendanceDay


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    reason: Optional[str] = None
    half_day_type: Optional[HalfDayType] = None
    clear_clock_out: bool = False


class DayStatusStrategy(ABC):
    """Strategy Pattern: encapsulate how a closed day's final status is decided."""

    @abstractmethod
    def decide(self, record: Optional[AttendanceDay]) -> StatusDecision:
        raise NotImplementedError

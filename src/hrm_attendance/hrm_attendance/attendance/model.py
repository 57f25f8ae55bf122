from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..core.constants import DEFAULT_WORK_MODE
from ..core.enums import AttendanceStatus, HalfDayType


@dataclass(frozen=True)
class BreakSession:
    """One break inside an attendance day; ``break_out`` is None while the break is running."""

    break_in: Optional[datetime]
    break_out: Optional[datetime] = None
    duration_minutes: int = 0

    @property
    def is_open(self) -> bool:
        return self.break_in is not None and self.break_out is None

    def to_dict(self) -> dict:
        return {
            "breakIn": self.break_in.isoformat() if self.break_in else None,
            "breakOut": self.break_out.isoformat() if self.break_out else None,
            "duration": int(self.duration_minutes),
        }


@dataclass(frozen=True)
class AttendanceDay:
    """Domain entity: one employee's attendance for one shift day.

    Derived fields (late/work/break/overtime/early exit) are written by the
    services from the calculation engine; they are never computed here.
    """

    attendance_id: int
    employee_id: int
    attendance_date: date
    shift_id: Optional[int] = None
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    break_sessions: Tuple[BreakSession, ...] = ()
    is_late: bool = False
    late_minutes: int = 0
    work_minutes: int = 0
    break_minutes: int = 0
    overtime_minutes: int = 0
    early_exit_minutes: int = 0
    is_early_departure: bool = False
    status: AttendanceStatus = AttendanceStatus.INCOMPLETE
    status_reason: Optional[str] = None
    half_day_type: Optional[HalfDayType] = None
    work_mode: str = DEFAULT_WORK_MODE

    @property
    def work_hours(self) -> float:
        return round(self.work_minutes / 60, 2)

    @property
    def overtime_hours(self) -> float:
        return round(self.overtime_minutes / 60, 2)

    @property
    def has_open_break(self) -> bool:
        return any(s.is_open for s in self.break_sessions)


@dataclass(frozen=True)
class LateCalculationResult:
    """Lateness of a clock-in against the anchored shift start.

    ``not_late()`` is the fallback for missing/malformed inputs.
    """

    is_late: bool
    late_minutes: int
    shift_start: Optional[datetime] = None
    late_threshold: Optional[datetime] = None

    @classmethod
    def not_late(cls) -> "LateCalculationResult":
        return cls(is_late=False, late_minutes=0)


@dataclass(frozen=True)
class WorkTimeResult:
    work_minutes: int
    break_minutes: int

    @property
    def work_hours(self) -> float:
        return round(self.work_minutes / 60, 2)

    @classmethod
    def zero(cls) -> "WorkTimeResult":
        return cls(work_minutes=0, break_minutes=0)


@dataclass(frozen=True)
class ActionCheck:
    """Whether a clock/break action is currently allowed, and why not."""

    allowed: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "ActionCheck":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "ActionCheck":
        return cls(allowed=False, reason=reason)

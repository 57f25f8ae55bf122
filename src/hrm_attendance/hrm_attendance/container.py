from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import DayStatusStrategyFactory
from .attendance.finalization import AttendanceFinalizer
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .corrections.repository import CorrectionRepository
from .corrections.service import CorrectionService
from .schedules.repository import ShiftAssignmentRepository
from .schedules.service import ShiftResolver
from .settings import EngineSettings
from .shifts.repository import ShiftRepository
from .summary.service import AttendanceSummaryService


@dataclass(frozen=True)
class Container:
    settings: EngineSettings

    attendance_repo: AttendanceRepository
    shifts_repo: ShiftRepository
    assignments_repo: ShiftAssignmentRepository
    corrections_repo: CorrectionRepository

    shift_resolver: ShiftResolver
    attendance_service: AttendanceService
    finalizer: AttendanceFinalizer
    correction_service: CorrectionService
    summary_service: AttendanceSummaryService


def build_container(
    *,
    attendance: AttendanceRepository,
    shifts: ShiftRepository,
    assignments: ShiftAssignmentRepository,
    corrections: CorrectionRepository,
    settings: Optional[EngineSettings] = None,
) -> Container:
    settings = settings or EngineSettings()
    strategy_factory = DayStatusStrategyFactory(
        standard_full_day_hours=settings.standard_full_day_hours,
        standard_half_day_hours=settings.standard_half_day_hours,
    )

    attendance_service = AttendanceService(attendance, shifts, assignments, settings=settings)
    finalizer = AttendanceFinalizer(
        attendance,
        shifts,
        assignments,
        corrections,
        settings=settings,
        strategy_factory=strategy_factory,
    )
    correction_service = CorrectionService(
        corrections,
        attendance,
        shifts,
        assignments,
        settings=settings,
        strategy_factory=strategy_factory,
    )

    return Container(
        settings=settings,
        attendance_repo=attendance,
        shifts_repo=shifts,
        assignments_repo=assignments,
        corrections_repo=corrections,
        shift_resolver=ShiftResolver(shifts, assignments),
        attendance_service=attendance_service,
        finalizer=finalizer,
        correction_service=correction_service,
        summary_service=AttendanceSummaryService(attendance),
    )

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import now_local
from ..common.logger import get_logger
from ..core.enums import AttendanceStatus, CorrectionIssue
from ..corrections.repository import CorrectionRepository
from ..schedules.repository import ShiftAssignmentRepository
from ..schedules.service import ShiftResolver
from ..settings import EngineSettings
from ..shifts.repository import ShiftRepository
from .calculation import shift_window
from .factory import DayStatusStrategyFactory
from .model import AttendanceDay
from .repository import AttendanceRepository
from .service import with_computed_times

logger = get_logger(__name__)

# Only live records are closed; leave/holiday and already-finalized days are left alone.
_OPEN_STATUSES = {AttendanceStatus.INCOMPLETE, AttendanceStatus.IN_PROGRESS, AttendanceStatus.COMPLETED}


@dataclass
class FinalizationStats:
    processed: int = 0
    skipped: int = 0
    present: int = 0
    half_day: int = 0
    absent: int = 0
    pending_correction: int = 0
    errors: int = 0

    def count(self, status: AttendanceStatus) -> None:
        if status == AttendanceStatus.PRESENT:
            self.present += 1
        elif status == AttendanceStatus.HALF_DAY:
            self.half_day += 1
        elif status == AttendanceStatus.ABSENT:
            self.absent += 1
        elif status == AttendanceStatus.PENDING_CORRECTION:
            self.pending_correction += 1


class AttendanceFinalizer:
    """Closes attendance days once each employee's shift is over.

    Meant to be run periodically (e.g. every 15 minutes) so that employees on
    different shifts are finalized as their own shift ends.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        shifts: ShiftRepository,
        assignments: ShiftAssignmentRepository,
        corrections: CorrectionRepository,
        *,
        settings: EngineSettings | None = None,
        strategy_factory: DayStatusStrategyFactory | None = None,
    ):
        self._settings = settings or EngineSettings()
        self._attendance = attendance
        self._resolver = ShiftResolver(shifts, assignments)
        self._corrections = corrections
        self._factory = strategy_factory or DayStatusStrategyFactory(
            standard_full_day_hours=self._settings.standard_full_day_hours,
            standard_half_day_hours=self._settings.standard_half_day_hours,
        )

    def finalize_date(
        self,
        employee_ids: Iterable[int],
        work_date: date,
        *,
        now: datetime | None = None,
    ) -> FinalizationStats:
        now = now or now_local()
        stats = FinalizationStats()
        logger.info("Starting attendance finalization for %s", work_date)

        for employee_id in employee_ids:
            try:
                self.finalize_employee(employee_id, work_date, now=now, stats=stats)
                stats.processed += 1
            except Exception:
                logger.exception("Error finalizing attendance for employee %s on %s", employee_id, work_date)
                stats.errors += 1

        logger.info("Attendance finalization completed for %s: %s", work_date, stats)
        return stats

    def finalize_employee(
        self,
        employee_id: int,
        work_date: date,
        *,
        now: datetime,
        stats: FinalizationStats | None = None,
    ) -> Optional[AttendanceDay]:
        """Close one employee's day. Returns the written record, or None when skipped."""

        stats = stats if stats is not None else FinalizationStats()
        shift = self._resolver.effective_shift(employee_id=employee_id, work_date=work_date)

        window = shift_window(shift, work_date)
        if window is not None:
            finalize_after = window[1] + timedelta(minutes=self._settings.finalization_delay_minutes)
            if now < finalize_after:
                logger.debug("Skipping employee %s - shift not finished yet (ends %s)", employee_id, window[1])
                stats.skipped += 1
                return None

        record = self._attendance.get_for_employee_and_date(employee_id, work_date)
        if record is not None and record.status not in _OPEN_STATUSES:
            logger.debug("Employee %s: already finalized (%s)", employee_id, record.status.value)
            stats.skipped += 1
            return None

        strategy = self._factory.for_record(record, shift)

        if record is None:
            decision = strategy.decide(record)
            written = self._attendance.create(
                AttendanceDay(
                    attendance_id=0,
                    employee_id=employee_id,
                    attendance_date=work_date,
                    shift_id=shift.shift_id if shift else None,
                    status=decision.status,
                    status_reason=decision.reason,
                )
            )
        else:
            updated = record
            if updated.clock_in and updated.clock_out:
                updated = with_computed_times(updated, shift)

            # Classify on the recomputed minutes, not whatever was stored.
            decision = strategy.decide(updated)
            if decision.clear_clock_out:
                updated = replace(updated, clock_out=None)
            written = self._attendance.save(
                replace(
                    updated,
                    status=decision.status,
                    status_reason=decision.reason,
                    half_day_type=decision.half_day_type,
                )
            )

        if decision.status == AttendanceStatus.PENDING_CORRECTION:
            self._open_missed_punch_request(written, now=now)

        stats.count(decision.status)
        logger.debug("Employee %s: %s (%s)", employee_id, decision.status.value, decision.reason)
        return written

    def _open_missed_punch_request(self, record: AttendanceDay, *, now: datetime) -> None:
        if self._corrections.get_pending_for_attendance(attendance_id=record.attendance_id):
            return
        self._corrections.create(
            employee_id=record.employee_id,
            attendance_id=record.attendance_id,
            work_date=record.attendance_date,
            issue_type=CorrectionIssue.MISSED_PUNCH,
            requested_clock_in=None,
            requested_clock_out=None,
            reason="Auto-detected missed clock-out",
            created_at=now,
        )

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

from ..common.datetime_utils import now_local
from ..common.logger import get_logger
from ..common.validators import require_work_mode
from ..core.enums import AttendanceStatus
from ..core.exceptions import StateTransitionError
from ..schedules.repository import ShiftAssignmentRepository
from ..schedules.service import ShiftResolver
from ..settings import EngineSettings
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .calculation import (
    classify_state,
    compute_break_duration,
    compute_early_exit,
    compute_late_status,
    compute_live_work_minutes,
    compute_overtime,
    compute_work_minutes,
    normalize_break_sessions,
    resolve_attendance_date,
    shift_window,
)
from .guards import can_clock_in, can_clock_out, can_end_break, can_start_break, current_break
from .model import ActionCheck, AttendanceDay, BreakSession, WorkTimeResult
from .repository import AttendanceRepository

logger = get_logger(__name__)


def with_computed_times(record: AttendanceDay, shift: Optional[Shift]) -> AttendanceDay:
    """Re-derive late/work/break/overtime/early-exit fields from the raw clock data."""

    late = compute_late_status(record.clock_in, shift, record.attendance_date)
    work = compute_work_minutes(record.clock_in, record.clock_out, record.break_sessions)
    early_exit = compute_early_exit(record.clock_out, shift, record.attendance_date)
    return replace(
        record,
        is_late=late.is_late,
        late_minutes=late.late_minutes,
        work_minutes=work.work_minutes,
        break_minutes=work.break_minutes,
        overtime_minutes=compute_overtime(work.work_minutes, shift),
        early_exit_minutes=early_exit,
        is_early_departure=early_exit > 0,
    )


def _require(check: ActionCheck) -> None:
    if not check.allowed:
        raise StateTransitionError(check.reason or "Action not allowed")


class AttendanceService:
    """Clock-in, breaks and clock-out for an employee's attendance day."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        shifts: ShiftRepository,
        assignments: ShiftAssignmentRepository,
        *,
        settings: EngineSettings | None = None,
    ):
        self._attendance = attendance
        self._resolver = ShiftResolver(shifts, assignments)
        self._settings = settings or EngineSettings()

    def _shift_for(self, employee_id: int, work_date: date) -> Optional[Shift]:
        return self._resolver.effective_shift(employee_id=employee_id, work_date=work_date)

    def _shift_day(self, employee_id: int, now: datetime) -> Tuple[date, Optional[Shift]]:
        shift = self._shift_for(employee_id, now.date())
        attendance_date = resolve_attendance_date(now, shift)
        if attendance_date != now.date():
            shift = self._shift_for(employee_id, attendance_date)
        return attendance_date, shift

    def _live_record(self, employee_id: int, now: datetime) -> Optional[AttendanceDay]:
        """The open record still being worked at ``now``.

        A day parked by the finalizer, or one whose shift ended (plus the
        finalization delay) without a clock-out, does not count.
        """

        record = self._attendance.get_open_for_employee(employee_id)
        if record is None or record.status != AttendanceStatus.IN_PROGRESS:
            return None

        attendance_date, _ = self._shift_day(employee_id, now)
        if record.attendance_date == attendance_date:
            return record

        window = shift_window(self._shift_for(employee_id, record.attendance_date), record.attendance_date)
        if window and now <= window[1] + timedelta(minutes=self._settings.finalization_delay_minutes):
            return record

        logger.debug("Employee %s: open record for %s is stale at %s", employee_id, record.attendance_date, now)
        return None

    def clock_in(
        self,
        employee_id: int,
        *,
        now: datetime | None = None,
        work_mode: str | None = None,
        attendance_date: date | None = None,
    ) -> AttendanceDay:
        now = now or now_local()
        mode = require_work_mode(work_mode or self._settings.default_work_mode)

        if attendance_date is None:
            attendance_date, shift = self._shift_day(employee_id, now)
        else:
            shift = self._shift_for(employee_id, attendance_date)

        existing = self._attendance.get_for_employee_and_date(employee_id, attendance_date)
        _require(can_clock_in(existing, shift, now=now, attendance_date=attendance_date))

        late = compute_late_status(now, shift, attendance_date)
        fields = dict(
            shift_id=shift.shift_id if shift else None,
            clock_in=now,
            is_late=late.is_late,
            late_minutes=late.late_minutes,
            status=AttendanceStatus.IN_PROGRESS,
            status_reason=None,
            work_mode=mode,
        )

        if existing:
            record = self._attendance.save(replace(existing, **fields))
        else:
            record = self._attendance.create(
                AttendanceDay(attendance_id=0, employee_id=employee_id, attendance_date=attendance_date, **fields)
            )

        if late.is_late:
            logger.info("Employee %s clocked in late by %s minutes for %s", employee_id, late.late_minutes, attendance_date)
        else:
            logger.info("Employee %s clocked in on time for %s", employee_id, attendance_date)
        return record

    def start_break(self, employee_id: int, *, now: datetime | None = None) -> AttendanceDay:
        now = now or now_local()
        record = self._live_record(employee_id, now)
        _require(can_start_break(record))

        sessions = tuple(normalize_break_sessions(record.break_sessions)) + (BreakSession(break_in=now),)
        record = self._attendance.save(replace(record, break_sessions=sessions))
        logger.debug("Employee %s started break #%s", employee_id, len(sessions))
        return record

    def end_break(self, employee_id: int, *, now: datetime | None = None) -> AttendanceDay:
        now = now or now_local()
        record = self._live_record(employee_id, now)
        _require(can_end_break(record))

        sessions = []
        for session in normalize_break_sessions(record.break_sessions):
            if session.is_open:
                closed = replace(session, break_out=now)
                session = replace(closed, duration_minutes=compute_break_duration(closed))
            sessions.append(session)

        totals = compute_work_minutes(record.clock_in, now, sessions)
        record = self._attendance.save(replace(record, break_sessions=tuple(sessions), break_minutes=totals.break_minutes))
        logger.debug("Employee %s ended break; %s break minutes so far", employee_id, totals.break_minutes)
        return record

    def clock_out(self, employee_id: int, *, now: datetime | None = None) -> AttendanceDay:
        now = now or now_local()
        record = self._live_record(employee_id, now)
        _require(can_clock_out(record))

        shift = self._shift_for(employee_id, record.attendance_date)
        closed = with_computed_times(replace(record, clock_out=now, status=AttendanceStatus.COMPLETED), shift)
        closed = self._attendance.save(closed)

        logger.info(
            "Employee %s clocked out for %s: %s work minutes, %s break minutes, %s overtime",
            employee_id,
            closed.attendance_date,
            closed.work_minutes,
            closed.break_minutes,
            closed.overtime_minutes,
        )
        return closed

    def get_day_overview(self, employee_id: int, *, now: datetime | None = None) -> dict:
        """Current state, live totals and button availability for the employee's day."""

        now = now or now_local()
        record = self._live_record(employee_id, now)
        if record is None:
            attendance_date, _ = self._shift_day(employee_id, now)
            record = self._attendance.get_for_employee_and_date(employee_id, attendance_date)
        else:
            attendance_date = record.attendance_date
        shift = self._shift_for(employee_id, attendance_date)

        has_clock_in = bool(record and record.clock_in)
        has_clock_out = bool(record and record.clock_out)
        state = classify_state(has_clock_in, has_clock_out, bool(record and record.has_open_break))

        if has_clock_in and not has_clock_out:
            totals = compute_live_work_minutes(record.clock_in, now, record.break_sessions)
        elif record:
            totals = WorkTimeResult(work_minutes=record.work_minutes, break_minutes=record.break_minutes)
        else:
            totals = WorkTimeResult.zero()

        def button(check: ActionCheck) -> dict:
            return {"enabled": check.allowed, "reason": check.reason}

        open_break = current_break(record)

        return {
            "attendance_date": attendance_date.strftime("%Y-%m-%d"),
            "state": state.value,
            "status": record.status.value if record else AttendanceStatus.INCOMPLETE.value,
            "is_late": bool(record and record.is_late),
            "late_minutes": record.late_minutes if record else 0,
            "work_minutes": totals.work_minutes,
            "break_minutes": totals.break_minutes,
            "break_started_at": open_break.break_in.isoformat() if open_break and open_break.break_in else None,
            "work_mode": record.work_mode if record else self._settings.default_work_mode,
            "buttons": {
                "clock_in": button(can_clock_in(record, shift, now=now, attendance_date=attendance_date)),
                "clock_out": button(can_clock_out(record)),
                "start_break": button(can_start_break(record)),
                "end_break": button(can_end_break(record)),
            },
            "shift": {
                "name": shift.shift_name,
                "start_time": str(shift.start_time),
                "end_time": str(shift.end_time),
                "grace_period_minutes": shift.grace_minutes,
            }
            if shift
            else None,
        }

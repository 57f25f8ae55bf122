"""Attendance time-accounting engine.

Pure functions over clock-in/clock-out/break timestamps and a shift definition.
No I/O and no shared state: safe to call from any number of callers.

Every shift-relative instant is built from the record's *attendance date* plus
the shift's time-of-day, never from the calendar date of the clock-in itself.
Malformed or missing inputs never raise; they produce the conservative result
("not late", zero minutes) and a DEBUG log line.
"""

from __future__ import annotations

import json
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from ..common.datetime_utils import coerce_date, coerce_instant, floor_minutes, parse_time_of_day
from ..common.logger import get_logger
from ..core.enums import DayState
from ..shifts.model import Shift
from .model import BreakSession, LateCalculationResult, WorkTimeResult

logger = get_logger(__name__)


def _as_non_negative_int(value: Any) -> int:
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError):
        return 0


def compute_late_status(clock_in: Any, shift: Optional[Shift], attendance_date: Any) -> LateCalculationResult:
    """Late status of a clock-in for the shift anchored on ``attendance_date``.

    late threshold = shift start + grace period; lateness is floored to whole
    minutes, so arriving one second past the threshold is 0 minutes late.
    Early and on-time arrivals (grace boundary included) are never late.
    """

    if shift is None:
        return LateCalculationResult.not_late()

    clock_in_at = coerce_instant(clock_in)
    if clock_in_at is None:
        logger.debug("Late check skipped: invalid clock-in %r", clock_in)
        return LateCalculationResult.not_late()

    start = parse_time_of_day(getattr(shift, "start_time", None))
    if start is None:
        logger.debug("Late check skipped: shift %r has no usable start time", getattr(shift, "shift_id", None))
        return LateCalculationResult.not_late()

    anchor = coerce_date(attendance_date)
    if anchor is None:
        logger.debug("Late check skipped: invalid attendance date %r", attendance_date)
        return LateCalculationResult.not_late()

    shift_start = datetime.combine(anchor, start)
    grace = _as_non_negative_int(getattr(shift, "grace_period_minutes", 0))
    late_threshold = shift_start + timedelta(minutes=grace)

    if clock_in_at > late_threshold:
        return LateCalculationResult(
            is_late=True,
            late_minutes=floor_minutes(clock_in_at - late_threshold),
            shift_start=shift_start,
            late_threshold=late_threshold,
        )

    return LateCalculationResult(is_late=False, late_minutes=0, shift_start=shift_start, late_threshold=late_threshold)


def _session_duration(session: BreakSession) -> timedelta:
    if session.break_in is None or session.break_out is None:
        return timedelta(0)
    return max(session.break_out - session.break_in, timedelta(0))


def compute_work_minutes(clock_in: Any, clock_out: Any, break_sessions: Any = None) -> WorkTimeResult:
    """Worked and break minutes of a closed day.

    Open breaks contribute nothing. Work time is clamped at zero so bad break
    data can never produce negative worked time.
    """

    start = coerce_instant(clock_in)
    end = coerce_instant(clock_out)
    if start is None or end is None:
        return WorkTimeResult.zero()

    elapsed = end - start
    total_break = timedelta(0)
    for session in normalize_break_sessions(break_sessions):
        total_break += _session_duration(session)

    worked = max(elapsed - total_break, timedelta(0))
    return WorkTimeResult(work_minutes=floor_minutes(worked), break_minutes=floor_minutes(total_break))


def compute_live_work_minutes(clock_in: Any, now: datetime, break_sessions: Any = None) -> WorkTimeResult:
    """Worked minutes so far for a day still in progress; a running break counts up to ``now``."""

    now_at = coerce_instant(now)
    sessions = [
        replace(s, break_out=now_at) if s.is_open else s
        for s in normalize_break_sessions(break_sessions)
    ]
    return compute_work_minutes(clock_in, now_at, sessions)


def compute_break_duration(session: BreakSession) -> int:
    """Minutes of one closed break (0 while it is still open)."""
    return floor_minutes(_session_duration(session))


def _to_session(entry: Any) -> Optional[BreakSession]:
    if isinstance(entry, BreakSession):
        return entry
    if isinstance(entry, Mapping):
        break_in = entry.get("breakIn", entry.get("break_in"))
        break_out = entry.get("breakOut", entry.get("break_out"))
        return BreakSession(
            break_in=coerce_instant(break_in),
            break_out=coerce_instant(break_out),
            duration_minutes=_as_non_negative_int(entry.get("duration", entry.get("duration_minutes"))),
        )
    return None


def normalize_break_sessions(raw: Any) -> List[BreakSession]:
    """Uniform list of ``BreakSession`` from whatever the store handed back.

    Accepts None, JSON text, or a sequence of dicts/BreakSession objects.
    Unparseable input yields an empty list.
    """

    if raw is None:
        return []

    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")

    if isinstance(raw, str):
        if not raw.strip():
            return []
        try:
            raw = json.loads(raw)
        except ValueError as e:
            logger.debug("Failed to parse break sessions JSON: %s", e)
            return []

    if not isinstance(raw, (list, tuple)):
        logger.debug("Ignoring break sessions of type %s", type(raw).__name__)
        return []

    sessions: List[BreakSession] = []
    for entry in raw:
        session = _to_session(entry)
        if session is None:
            logger.debug("Dropping malformed break session %r", entry)
            continue
        sessions.append(session)
    return sessions


def serialize_break_sessions(sessions: Iterable[BreakSession]) -> str:
    """JSON text form of break sessions, readable by ``normalize_break_sessions``."""
    return json.dumps([s.to_dict() for s in normalize_break_sessions(list(sessions))])


def compute_overtime(work_minutes: int, shift: Optional[Shift]) -> int:
    full_day_hours = getattr(shift, "full_day_hours", None) if shift is not None else None
    if not full_day_hours:
        return 0
    try:
        threshold = int(float(full_day_hours) * 60)
    except (TypeError, ValueError):
        logger.debug("Overtime skipped: invalid full day hours %r", full_day_hours)
        return 0
    if threshold <= 0:
        return 0
    return max(0, _as_non_negative_int(work_minutes) - threshold)


def classify_state(has_clock_in: bool, has_clock_out: bool, has_open_break: bool) -> DayState:
    if not has_clock_in:
        return DayState.NOT_CLOCKED_IN
    if has_clock_out:
        return DayState.CLOCKED_OUT
    if has_open_break:
        return DayState.ON_BREAK
    return DayState.WORKING


def shift_window(shift: Optional[Shift], attendance_date: Any) -> Optional[Tuple[datetime, datetime]]:
    """Absolute (start, end) of the shift on its attendance date.

    Overnight shifts (end <= start) end on the following calendar day.
    """

    if shift is None:
        return None
    start = parse_time_of_day(shift.start_time)
    end = parse_time_of_day(shift.end_time)
    anchor = coerce_date(attendance_date)
    if start is None or end is None or anchor is None:
        return None

    start_at = datetime.combine(anchor, start)
    end_at = datetime.combine(anchor, end)
    if end_at <= start_at:
        end_at += timedelta(days=1)
    return start_at, end_at


def compute_early_exit(clock_out: Any, shift: Optional[Shift], attendance_date: Any) -> int:
    """Minutes between clock-out and the anchored shift end; 0 when leaving on time or later."""

    out_at = coerce_instant(clock_out)
    window = shift_window(shift, attendance_date)
    if out_at is None or window is None:
        return 0
    _, end_at = window
    if out_at >= end_at:
        return 0
    return floor_minutes(end_at - out_at)


def resolve_attendance_date(now: datetime, shift: Optional[Shift]) -> date:
    """Shift day a clock-in at ``now`` belongs to.

    Attendance dates are the day an overnight shift *starts*: a clock-in in
    the post-midnight part of an overnight window (before its end time)
    belongs to the previous date.
    """

    if shift is not None and shift.is_overnight:
        end = parse_time_of_day(shift.end_time)
        if end is not None and now.time() < end:
            return now.date() - timedelta(days=1)
    return now.date()

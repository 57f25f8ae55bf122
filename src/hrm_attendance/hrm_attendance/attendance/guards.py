"""Which clock/break actions a record allows right now.

These drive both the service's state checks and the button states shown to
employees, so a disabled button and a rejected request always agree.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..shifts.model import Shift
from .calculation import shift_window
from .model import ActionCheck, AttendanceDay, BreakSession

_PROTECTED = {AttendanceStatus.LEAVE, AttendanceStatus.HOLIDAY}
_FINALIZED = {AttendanceStatus.ABSENT, AttendanceStatus.PRESENT, AttendanceStatus.HALF_DAY}


def current_break(record: Optional[AttendanceDay]) -> Optional[BreakSession]:
    if record is None:
        return None
    return next((s for s in record.break_sessions if s.is_open), None)


def can_clock_in(
    record: Optional[AttendanceDay],
    shift: Optional[Shift],
    *,
    now: datetime,
    attendance_date: date,
) -> ActionCheck:
    if record is not None:
        if record.status in _PROTECTED:
            return ActionCheck.deny(f"Cannot clock in - you are on {record.status.value} today")
        if record.clock_in is not None:
            return ActionCheck.deny("Already clocked in today")
        if record.status in _FINALIZED:
            return ActionCheck.deny("Attendance already finalized for today")
        if record.status == AttendanceStatus.PENDING_CORRECTION:
            return ActionCheck.deny("Attendance correction pending - contact HR")

    if shift is not None:
        window = shift_window(shift, attendance_date)
        if window and now > window[1]:
            return ActionCheck.deny("Shift time has already ended")

    return ActionCheck.ok()


def can_clock_out(record: Optional[AttendanceDay]) -> ActionCheck:
    if record is None or record.clock_in is None:
        return ActionCheck.deny("Must clock in first")
    if record.clock_out is not None:
        return ActionCheck.deny("Already clocked out today")
    if record.status in _PROTECTED:
        return ActionCheck.deny(f"Cannot clock out - you are on {record.status.value} today")
    if record.status == AttendanceStatus.ABSENT:
        return ActionCheck.deny("Attendance marked as absent - contact HR for correction")
    if record.status == AttendanceStatus.PENDING_CORRECTION:
        return ActionCheck.deny("Attendance correction pending - contact HR")
    if record.has_open_break:
        return ActionCheck.deny("End your current break before clocking out")
    return ActionCheck.ok()


def can_start_break(record: Optional[AttendanceDay]) -> ActionCheck:
    if record is None or record.clock_in is None or record.clock_out is not None:
        return ActionCheck.deny("Must be clocked in to take break")
    if record.status in _PROTECTED or record.status == AttendanceStatus.ABSENT:
        return ActionCheck.deny(f"Cannot take break - status is {record.status.value}")
    if record.has_open_break:
        return ActionCheck.deny("Already on break - end current break first")
    return ActionCheck.ok()


def can_end_break(record: Optional[AttendanceDay]) -> ActionCheck:
    if record is None or record.clock_in is None or record.clock_out is not None:
        return ActionCheck.deny("Must be clocked in to end break")
    if not record.has_open_break:
        return ActionCheck.deny("Not currently on break")
    return ActionCheck.ok()

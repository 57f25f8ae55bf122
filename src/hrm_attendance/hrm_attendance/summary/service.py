from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..attendance.calculation import compute_live_work_minutes
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_minutes, now_local
from ..common.logger import get_logger
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError

logger = get_logger(__name__)


@dataclass(frozen=True)
class MonthlySummary:
    employee_id: int
    year: int
    month: int
    total_days: int
    present_days: int
    half_days: int
    absent_days: int
    leave_days: int
    holiday_days: int
    pending_correction_days: int
    incomplete_days: int
    in_progress_days: int
    completed_days: int
    live_sessions: int
    late_days: int
    total_late_minutes: int
    early_departures: int
    total_early_exit_minutes: int
    total_worked_minutes: int
    total_break_minutes: int
    total_overtime_minutes: int
    includes_live_session: bool

    @property
    def average_work_hours(self) -> float:
        if not self.total_days:
            return 0.0
        return round(self.total_worked_minutes / 60 / self.total_days, 2)

    @property
    def attendance_percentage(self) -> int:
        if not self.total_days:
            return 0
        return round((self.present_days + self.half_days * 0.5) / self.total_days * 100)

    def as_report(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "month": f"{self.year:04d}-{self.month:02d}",
            "total_days": self.total_days,
            "present_days": self.present_days,
            "half_days": self.half_days,
            "absent_days": self.absent_days,
            "leave_days": self.leave_days,
            "holiday_days": self.holiday_days,
            "pending_correction_days": self.pending_correction_days,
            "incomplete_days": self.incomplete_days,
            "in_progress_days": self.in_progress_days,
            "completed_days": self.completed_days,
            "live_sessions": self.live_sessions,
            "late_days": self.late_days,
            "total_late_minutes": self.total_late_minutes,
            "early_departures": self.early_departures,
            "total_early_exit_minutes": self.total_early_exit_minutes,
            "worked_hours": format_minutes(self.total_worked_minutes),
            "break_hours": format_minutes(self.total_break_minutes),
            "overtime_hours": format_minutes(self.total_overtime_minutes),
            "average_work_hours": self.average_work_hours,
            "attendance_percentage": self.attendance_percentage,
            "includes_live_session": self.includes_live_session,
        }


class AttendanceSummaryService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def monthly_summary(
        self,
        employee_id: int,
        year: int,
        month: int,
        *,
        now: Optional[datetime] = None,
    ) -> MonthlySummary:
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")

        now = now or now_local()
        start = date(int(year), int(month), 1)
        end = date(int(year), int(month), calendar.monthrange(int(year), int(month))[1])
        records = self._attendance.list_for_employee_between(int(employee_id), start, end)

        counts = {status: 0 for status in AttendanceStatus}
        worked = breaks = overtime = late_minutes = early_minutes = 0
        late_days = early_departures = live_days = 0

        for r in records:
            counts[r.status] += 1
            if r.is_late:
                late_days += 1
                late_minutes += r.late_minutes
            if r.is_early_departure:
                early_departures += 1
                early_minutes += r.early_exit_minutes
            overtime += r.overtime_minutes

            if r.status == AttendanceStatus.IN_PROGRESS and r.clock_in and not r.clock_out:
                # Still running: count time worked up to now.
                live = compute_live_work_minutes(r.clock_in, now, r.break_sessions)
                worked += live.work_minutes
                breaks += live.break_minutes
                live_days += 1
            else:
                worked += r.work_minutes
                breaks += r.break_minutes

        summary = MonthlySummary(
            employee_id=int(employee_id),
            year=int(year),
            month=int(month),
            total_days=len(records),
            present_days=counts[AttendanceStatus.PRESENT],
            half_days=counts[AttendanceStatus.HALF_DAY],
            absent_days=counts[AttendanceStatus.ABSENT],
            leave_days=counts[AttendanceStatus.LEAVE],
            holiday_days=counts[AttendanceStatus.HOLIDAY],
            pending_correction_days=counts[AttendanceStatus.PENDING_CORRECTION],
            incomplete_days=counts[AttendanceStatus.INCOMPLETE],
            in_progress_days=counts[AttendanceStatus.IN_PROGRESS],
            completed_days=counts[AttendanceStatus.COMPLETED],
            live_sessions=live_days,
            late_days=late_days,
            total_late_minutes=late_minutes,
            early_departures=early_departures,
            total_early_exit_minutes=early_minutes,
            total_worked_minutes=worked,
            total_break_minutes=breaks,
            total_overtime_minutes=overtime,
            includes_live_session=live_days > 0,
        )
        logger.debug("Monthly summary for employee %s %s-%02d: %s days", employee_id, year, month, summary.total_days)
        return summary

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..attendance.factory import DayStatusStrategyFactory
from ..attendance.model import AttendanceDay
from ..attendance.repository import AttendanceRepository
from ..attendance.service import with_computed_times
from ..common.datetime_utils import now_local
from ..common.logger import get_logger
from ..common.validators import optional_text
from ..core.enums import AttendanceStatus, CorrectionIssue, RequestStatus, Role
from ..core.exceptions import AuthorizationError, RecordNotFoundError, ValidationError
from ..schedules.repository import ShiftAssignmentRepository
from ..schedules.service import ShiftResolver
from ..settings import EngineSettings
from ..shifts.repository import ShiftRepository
from .repository import CorrectionRepository

logger = get_logger(__name__)

_REVIEWERS = {Role.ADMIN, Role.HR}


class CorrectionService:
    """Employee correction requests and the HR approval that rewrites clock times."""

    def __init__(
        self,
        corrections: CorrectionRepository,
        attendance: AttendanceRepository,
        shifts: ShiftRepository,
        assignments: ShiftAssignmentRepository,
        *,
        settings: EngineSettings | None = None,
        strategy_factory: DayStatusStrategyFactory | None = None,
    ):
        settings = settings or EngineSettings()
        self._corrections = corrections
        self._attendance = attendance
        self._resolver = ShiftResolver(shifts, assignments)
        self._factory = strategy_factory or DayStatusStrategyFactory(
            standard_full_day_hours=settings.standard_full_day_hours,
            standard_half_day_hours=settings.standard_half_day_hours,
        )

    def request_correction(
        self,
        *,
        employee_id: int,
        work_date: date,
        requested_clock_in: Optional[datetime] = None,
        requested_clock_out: Optional[datetime] = None,
        reason: str = "",
        now: datetime | None = None,
    ) -> int:
        record = self._attendance.get_for_employee_and_date(int(employee_id), work_date)
        if not record:
            raise RecordNotFoundError("No attendance record for this day")

        reason_text = optional_text(reason)
        if not requested_clock_in and not requested_clock_out and not reason_text:
            raise ValidationError("Provide at least one change or a reason")

        if requested_clock_in and requested_clock_out and requested_clock_out < requested_clock_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        if self._corrections.get_pending_for_attendance(attendance_id=record.attendance_id):
            raise ValidationError("A correction is already pending for this day")

        issue = CorrectionIssue.MISSED_PUNCH if record.clock_out is None else CorrectionIssue.WRONG_TIME
        return self._corrections.create(
            employee_id=int(employee_id),
            attendance_id=record.attendance_id,
            work_date=work_date,
            issue_type=issue,
            requested_clock_in=requested_clock_in,
            requested_clock_out=requested_clock_out,
            reason=reason_text,
            created_at=now or now_local(),
        )

    def approve(
        self,
        *,
        current_role: Role,
        reviewer_id: int,
        request_id: int,
        admin_note: str = "",
        now: datetime | None = None,
    ) -> AttendanceDay:
        if current_role not in _REVIEWERS:
            raise AuthorizationError("Only HR and admins can process corrections")

        req = self._corrections.get(request_id=int(request_id))
        if not req:
            raise RecordNotFoundError("Correction request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Correction request was already processed")

        record = self._attendance.get_by_id(req.attendance_id)
        if not record:
            raise RecordNotFoundError("Attendance record for this request no longer exists")

        clock_in = req.requested_clock_in or record.clock_in
        clock_out = req.requested_clock_out or record.clock_out
        if clock_in and clock_out and clock_out < clock_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        shift = self._resolver.effective_shift(employee_id=record.employee_id, work_date=record.attendance_date)
        corrected = with_computed_times(replace(record, clock_in=clock_in, clock_out=clock_out), shift)

        if corrected.clock_in and corrected.clock_out:
            decision = self._factory.for_completed_day(shift).decide(corrected)
            corrected = replace(
                corrected,
                status=decision.status,
                status_reason=decision.reason,
                half_day_type=decision.half_day_type,
            )
        else:
            corrected = replace(
                corrected,
                status=AttendanceStatus.INCOMPLETE,
                status_reason="Correction approved - pending re-evaluation",
                half_day_type=None,
            )

        saved = self._attendance.save(corrected)

        decided = self._corrections.decide(
            request_id=int(request_id),
            status=RequestStatus.APPROVED,
            decided_by=int(reviewer_id),
            decided_at=now or now_local(),
            admin_note=optional_text(admin_note),
        )
        if not decided:
            raise ValidationError("Failed to approve correction request")

        logger.info(
            "Correction %s approved by %s: record %s now %s (%s work minutes, late %s)",
            request_id,
            reviewer_id,
            saved.attendance_id,
            saved.status.value,
            saved.work_minutes,
            saved.late_minutes,
        )
        return saved

    def reject(
        self,
        *,
        current_role: Role,
        reviewer_id: int,
        request_id: int,
        admin_note: str = "",
        now: datetime | None = None,
    ) -> None:
        if current_role not in _REVIEWERS:
            raise AuthorizationError("Only HR and admins can process corrections")

        decided = self._corrections.decide(
            request_id=int(request_id),
            status=RequestStatus.REJECTED,
            decided_by=int(reviewer_id),
            decided_at=now or now_local(),
            admin_note=optional_text(admin_note),
        )
        if not decided:
            raise ValidationError("Failed to reject correction request")
        logger.info("Correction %s rejected by %s", request_id, reviewer_id)

    def list_pending(self, *, limit: int = 500):
        return self._corrections.list(status=RequestStatus.PENDING, limit=limit)

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from src.hrm_attendance.hrm_attendance.attendance.model import AttendanceDay
from src.hrm_attendance.hrm_attendance.core.enums import RequestStatus
from src.hrm_attendance.hrm_attendance.corrections.model import CorrectionRequest
from src.hrm_attendance.hrm_attendance.schedules.model import ShiftAssignment
from src.hrm_attendance.hrm_attendance.shifts.model import Shift


class InMemoryShifts:
    def __init__(self, shifts=()):
        self.shifts = {s.shift_id: s for s in shifts}

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self.shifts.get(shift_id)

    def get_default(self) -> Optional[Shift]:
        return next((s for s in self.shifts.values() if s.is_default), None)


class InMemoryAssignments:
    def __init__(self, assignments=()):
        self.assignments = list(assignments)

    def get_active_for_employee(self, *, employee_id: int, work_date: date) -> Optional[ShiftAssignment]:
        matches = [a for a in self.assignments if a.employee_id == employee_id and a.covers(work_date)]
        matches.sort(key=lambda a: a.effective_from, reverse=True)
        return matches[0] if matches else None


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[int, AttendanceDay] = {}
        self._id = 0

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceDay]:
        return self.records.get(attendance_id)

    def get_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Optional[AttendanceDay]:
        return next(
            (r for r in self.records.values() if r.employee_id == employee_id and r.attendance_date == attendance_date),
            None,
        )

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceDay]:
        open_records = [
            r for r in self.records.values() if r.employee_id == employee_id and r.clock_in and not r.clock_out
        ]
        open_records.sort(key=lambda r: r.clock_in, reverse=True)
        return open_records[0] if open_records else None

    def list_for_employee_between(self, employee_id: int, start: date, end: date):
        items = [r for r in self.records.values() if r.employee_id == employee_id and start <= r.attendance_date <= end]
        items.sort(key=lambda r: r.attendance_date)
        return items

    def create(self, record: AttendanceDay) -> AttendanceDay:
        if self.get_for_employee_and_date(record.employee_id, record.attendance_date):
            raise ValueError("duplicate attendance record")
        self._id += 1
        saved = replace(record, attendance_id=self._id)
        self.records[self._id] = saved
        return saved

    def save(self, record: AttendanceDay) -> AttendanceDay:
        self.records[record.attendance_id] = record
        return record


class InMemoryCorrections:
    def __init__(self):
        self.requests: dict[int, CorrectionRequest] = {}
        self._id = 0

    def create(self, *, employee_id, attendance_id, work_date, issue_type, requested_clock_in, requested_clock_out, reason, created_at):
        self._id += 1
        self.requests[self._id] = CorrectionRequest(
            request_id=self._id,
            employee_id=employee_id,
            attendance_id=attendance_id,
            work_date=work_date,
            issue_type=issue_type,
            requested_clock_in=requested_clock_in,
            requested_clock_out=requested_clock_out,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=created_at,
        )
        return self._id

    def get(self, *, request_id):
        return self.requests.get(int(request_id))

    def get_pending_for_attendance(self, *, attendance_id):
        return next(
            (r for r in self.requests.values() if r.attendance_id == attendance_id and r.status == RequestStatus.PENDING),
            None,
        )

    def decide(self, *, request_id, status, decided_by, decided_at, admin_note=None):
        req = self.requests.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self.requests[int(request_id)] = replace(
            req, status=status, decided_by=decided_by, decided_at=decided_at, admin_note=admin_note
        )
        return True

    def list(self, *, status=None, employee_id=None, limit=200):
        items = [
            r
            for r in self.requests.values()
            if (status is None or r.status == status) and (employee_id is None or r.employee_id == employee_id)
        ]
        return items[:limit]


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 0, 0)


@pytest.fixture
def day_shift() -> Shift:
    return Shift(
        shift_id=1,
        shift_name="General",
        start_time=time(9, 0),
        end_time=time(18, 0),
        grace_period_minutes=10,
        full_day_hours=8,
        half_day_hours=4,
        is_default=True,
    )


@pytest.fixture
def night_shift() -> Shift:
    return Shift(
        shift_id=2,
        shift_name="Night",
        start_time="22:00",
        end_time="06:00",
        grace_period_minutes=5,
        full_day_hours=7,
        half_day_hours=4,
    )


@pytest.fixture
def shifts_repo(day_shift, night_shift) -> InMemoryShifts:
    return InMemoryShifts([day_shift, night_shift])


@pytest.fixture
def assignments_repo() -> InMemoryAssignments:
    return InMemoryAssignments()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def corrections_repo() -> InMemoryCorrections:
    return InMemoryCorrections()

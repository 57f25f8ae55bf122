from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceDay


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceDay]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Optional[AttendanceDay]:
        raise NotImplementedError

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceDay]:
        """Most recent record with a clock-in and no clock-out.

        Overnight shifts keep their record on the start date, so break and
        clock-out actions look the record up this way rather than by today.
        The service still checks the status and shift day before using it.
        """

        raise NotImplementedError

    def list_for_employee_between(self, employee_id: int, start: date, end: date) -> Sequence[AttendanceDay]:
        raise NotImplementedError

    def create(self, record: AttendanceDay) -> AttendanceDay:
        """Insert a new record; returns it with its assigned ``attendance_id``.

        Must reject a second record for the same employee and date.
        """

        raise NotImplementedError

    def save(self, record: AttendanceDay) -> AttendanceDay:
        """Persist an updated record.

        Implementations serialize concurrent writes to the same record
        (row lock or version check); the services read, compute and write
        inside one call to the repository per action.
        """

        raise NotImplementedError

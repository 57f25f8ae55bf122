from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for service-level permission checks."""

    ADMIN = "admin"
    HR = "hr"
    EMPLOYEE = "employee"


class DayState(str, Enum):
    """Coarse state of an attendance day while it is being worked."""

    NOT_CLOCKED_IN = "not_clocked_in"
    WORKING = "working"
    ON_BREAK = "on_break"
    CLOCKED_OUT = "clocked_out"


class AttendanceStatus(str, Enum):
    """Persisted status of an attendance record."""

    INCOMPLETE = "incomplete"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    PRESENT = "present"
    HALF_DAY = "half_day"
    ABSENT = "absent"
    LEAVE = "leave"
    HOLIDAY = "holiday"
    PENDING_CORRECTION = "pending_correction"


class HalfDayType(str, Enum):
    FIRST_HALF = "first_half"
    SECOND_HALF = "second_half"
    FULL_DAY = "full_day"


class RequestStatus(str, Enum):
    """Approval flow status of a correction request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CorrectionIssue(str, Enum):
    MISSED_PUNCH = "missed_punch"
    WRONG_TIME = "wrong_time"
    OTHER = "other"

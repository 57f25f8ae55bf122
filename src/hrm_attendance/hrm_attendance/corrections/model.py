from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import CorrectionIssue, RequestStatus


@dataclass(frozen=True)
class CorrectionRequest:
    request_id: int
    employee_id: int
    attendance_id: int
    work_date: date
    issue_type: CorrectionIssue
    requested_clock_in: Optional[datetime]
    requested_clock_out: Optional[datetime]
    reason: Optional[str]
    status: RequestStatus
    created_at: datetime
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    admin_note: Optional[str] = None

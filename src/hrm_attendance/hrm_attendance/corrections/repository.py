from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import CorrectionIssue, RequestStatus
from .model import CorrectionRequest


class CorrectionRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        attendance_id: int,
        work_date: date,
        issue_type: CorrectionIssue,
        requested_clock_in: Optional[datetime],
        requested_clock_out: Optional[datetime],
        reason: Optional[str],
        created_at: datetime,
    ) -> int:
        """Create a pending request. Returns request_id."""

        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[CorrectionRequest]:
        raise NotImplementedError

    def get_pending_for_attendance(self, *, attendance_id: int) -> Optional[CorrectionRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        decided_at: datetime,
        admin_note: Optional[str] = None,
    ) -> bool:
        """Move a pending request to APPROVED/REJECTED. False if it was not pending."""

        raise NotImplementedError

    def list(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[CorrectionRequest]:
        raise NotImplementedError

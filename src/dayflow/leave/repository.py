from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> LeaveRequest:
        raise NotImplementedError

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
        oldest_first: bool = False,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide(self, *, request_id: int, status: LeaveStatus, admin_comments: Optional[str]) -> Optional[LeaveRequest]:
        """Move a PENDING request to ``status``; None if it was no longer PENDING."""
        raise NotImplementedError

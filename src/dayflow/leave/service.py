from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_fields
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import NotFoundError, ValidationError
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, requests: LeaveRepository):
        self._requests = requests

    def request_leave(self, *, user_id: int, payload: Mapping[str, Any]) -> LeaveRequest:
        require_fields(
            payload,
            ("leave_type", "start_date", "end_date"),
            "Leave type, start date and end date are required",
        )

        try:
            leave_type = LeaveType(str(payload["leave_type"]).strip().upper())
        except ValueError:
            raise ValidationError("Leave type must be PAID, SICK, or UNPAID", "INVALID_LEAVE_TYPE")

        start_date = parse_iso_date(payload["start_date"], field_name="start_date")
        end_date = parse_iso_date(payload["end_date"], field_name="end_date")
        if end_date < start_date:
            raise ValidationError("End date must be after start date", "INVALID_DATE_RANGE")

        reason = str(payload.get("reason") or "").strip() or None
        return self._requests.create(
            user_id=int(user_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
        )

    def my_requests(self, user_id: int) -> list[LeaveRequest]:
        return list(self._requests.list_requests(user_id=int(user_id)))

    def pending(self) -> list[LeaveRequest]:
        return list(self._requests.list_requests(status=LeaveStatus.PENDING, oldest_first=True))

    def list_all(self) -> list[LeaveRequest]:
        return list(self._requests.list_requests())

    def approve(self, request_id: int, *, admin_comments: Optional[str] = None) -> LeaveRequest:
        return self._decide(request_id, LeaveStatus.APPROVED, admin_comments)

    def reject(self, request_id: int, *, admin_comments: Optional[str] = None) -> LeaveRequest:
        return self._decide(request_id, LeaveStatus.REJECTED, admin_comments)

    def _decide(self, request_id: int, status: LeaveStatus, admin_comments: Optional[str]) -> LeaveRequest:
        req = self._requests.get(int(request_id))
        if not req:
            raise NotFoundError("Leave request not found", "LEAVE_NOT_FOUND")
        if req.status != LeaveStatus.PENDING:
            raise ValidationError(f"Leave request is already {req.status.value.lower()}", "INVALID_STATUS")

        decided = self._requests.decide(
            request_id=req.request_id,
            status=status,
            admin_comments=str(admin_comments or "").strip() or None,
        )
        if not decided:
            # Someone else decided it between the read and the guarded update.
            raise ValidationError("Leave request is no longer pending", "INVALID_STATUS")
        logger.info("Leave request %s %s", req.request_id, status.value.lower())
        return decided

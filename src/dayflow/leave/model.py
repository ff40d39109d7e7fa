from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso
from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    status: LeaveStatus
    reason: Optional[str] = None
    admin_comments: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "id": self.request_id,
            "user_id": self.user_id,
            "leave_type": self.leave_type.value,
            "start_date": iso(self.start_date),
            "end_date": iso(self.end_date),
            "reason": self.reason,
            "status": self.status.value,
            "admin_comments": self.admin_comments,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
        if self.email is not None:
            out.update(email=self.email, first_name=self.first_name, last_name=self.last_name)
        return out

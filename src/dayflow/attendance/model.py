from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in/check-out pair per user per day."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in: datetime
    check_out: Optional[datetime] = None
    created_at: Optional[datetime] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def worked_minutes(self) -> int:
        if not self.check_out:
            return 0
        return max(int((self.check_out - self.check_in).total_seconds() // 60), 0)

    def to_dict(self) -> dict:
        out = {
            "id": self.attendance_id,
            "user_id": self.user_id,
            "date": iso(self.work_date),
            "check_in": iso(self.check_in),
            "check_out": iso(self.check_out),
            "worked_minutes": self.worked_minutes,
            "created_at": iso(self.created_at),
        }
        if self.email is not None:
            out.update(email=self.email, first_name=self.first_name, last_name=self.last_name)
        return out

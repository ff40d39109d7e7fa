from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(self, *, user_id: int, work_date: date, check_in: datetime) -> AttendanceRecord:
        """Raises ConflictError DUPLICATE_CHECKIN if the day already has a record."""
        raise NotImplementedError

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> Optional[AttendanceRecord]:
        """Sets check_out only while it is still empty; None otherwise."""
        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        newest_first: bool = False,
        with_user: bool = False,
    ) -> Sequence[AttendanceRecord]:
        """Records with ``start_date <= work_date <= end_date`` (both optional)."""
        raise NotImplementedError

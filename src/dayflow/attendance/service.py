from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_local, parse_iso_date, parse_optional_date
from ..common.validators import is_blank
from ..core.constants import ATTENDANCE_WEEK_DAYS
from ..core.exceptions import ConflictError, ValidationError
from .model import AttendanceRecord
from .repository import AttendanceRepository


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, *, clock: Callable[[], datetime] = now_local):
        self._attendance = attendance
        self._clock = clock

    def check_in(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()

        if self._attendance.get_for_user_and_date(user_id, today):
            raise ConflictError("Already checked in today", "DUPLICATE_CHECKIN")

        return self._attendance.create_checkin(user_id=user_id, work_date=today, check_in=now)

    def check_out(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record:
            raise ValidationError("No check-in found for today", "NO_CHECKIN")
        if record.check_out is not None:
            raise ConflictError("Already checked out today", "ALREADY_CHECKEDOUT")

        updated = self._attendance.update_checkout(attendance_id=record.attendance_id, check_out=now)
        if not updated:
            raise ConflictError("Already checked out today", "ALREADY_CHECKEDOUT")
        return updated

    def daily(self, user_id: int, day: Optional[str]) -> list[AttendanceRecord]:
        if is_blank(day):
            raise ValidationError("Date parameter is required (format: YYYY-MM-DD)", "MISSING_DATE")
        work_date = parse_iso_date(day)
        record = self._attendance.get_for_user_and_date(user_id, work_date)
        return [record] if record else []

    def weekly(self, user_id: int, start: Optional[str]) -> list[AttendanceRecord]:
        if is_blank(start):
            raise ValidationError("Start date parameter is required (format: YYYY-MM-DD)", "MISSING_START_DATE")
        start_date = parse_iso_date(start, field_name="startDate")
        end_date = start_date + timedelta(days=ATTENDANCE_WEEK_DAYS - 1)
        return list(self._attendance.list_for_user(user_id, start_date=start_date, end_date=end_date))

    def for_user(self, user_id: int, *, start: Optional[str] = None, end: Optional[str] = None) -> list[AttendanceRecord]:
        start_date: Optional[date] = parse_optional_date(start, field_name="startDate")
        end_date: Optional[date] = parse_optional_date(end, field_name="endDate")
        if start_date and end_date and end_date < start_date:
            raise ValidationError("End date must be after start date", "INVALID_DATE_RANGE")
        return list(
            self._attendance.list_for_user(
                user_id,
                start_date=start_date,
                end_date=end_date,
                newest_first=True,
                with_user=True,
            )
        )

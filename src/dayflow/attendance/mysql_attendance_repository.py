from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "a.id, a.user_id, a.work_date, a.check_in, a.check_out, a.created_at"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in=r["check_in"],
        check_out=r.get("check_out"),
        created_at=r.get("created_at"),
        email=r.get("email"),
        first_name=r.get("first_name"),
        last_name=r.get("last_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance a WHERE a.user_id=%s AND a.work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create_checkin(self, *, user_id: int, work_date: date, check_in: datetime) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO attendance(user_id, work_date, check_in) VALUES(%s,%s,%s)",
                    (int(user_id), work_date, check_in),
                )
                cur.execute(f"SELECT {_COLUMNS} FROM attendance a WHERE a.id=%s", (int(cur.lastrowid),))
                return _row_to_record(fetchone(cur))
        except Exception as exc:
            if is_duplicate_key(exc, "uq_attendance_user_date"):
                raise ConflictError("Already checked in today", "DUPLICATE_CHECKIN") from exc
            raise

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET check_out=%s WHERE id=%s AND check_out IS NULL",
                (check_out, int(attendance_id)),
            )
            if cur.rowcount == 0:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM attendance a WHERE a.id=%s", (int(attendance_id),))
            return _row_to_record(fetchone(cur))

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        newest_first: bool = False,
        with_user: bool = False,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["a.user_id=%s"]
        params: list[object] = [int(user_id)]

        if start_date is not None:
            clauses.append("a.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("a.work_date <= %s")
            params.append(end_date)

        columns = _COLUMNS
        joins = ""
        if with_user:
            columns += ", u.email, ep.first_name, ep.last_name"
            joins = "JOIN users u ON u.id = a.user_id LEFT JOIN employee_profiles ep ON ep.user_id = u.id"

        order = "DESC" if newest_first else "ASC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {columns}
                FROM attendance a
                {joins}
                WHERE {" AND ".join(clauses)}
                ORDER BY a.work_date {order}
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

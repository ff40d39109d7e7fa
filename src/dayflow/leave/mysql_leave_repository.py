from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = """
    lr.id, lr.user_id, lr.leave_type, lr.start_date, lr.end_date, lr.reason, lr.status,
    lr.admin_comments, lr.created_at, lr.updated_at
"""


def _row_to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["id"]),
        user_id=int(r["user_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=LeaveStatus(r["status"]),
        reason=r.get("reason"),
        admin_comments=r.get("admin_comments"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        email=r.get("email"),
        first_name=r.get("first_name"),
        last_name=r.get("last_name"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> LeaveRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, leave_type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), leave_type.value, start_date, end_date, reason, LeaveStatus.PENDING.value),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests lr WHERE lr.id=%s", (int(cur.lastrowid),))
            return _row_to_request(fetchone(cur))

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests lr WHERE lr.id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
        oldest_first: bool = False,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("lr.status=%s")
            params.append(status.value)
        if user_id is not None:
            clauses.append("lr.user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)
        order = "ASC" if oldest_first else "DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, u.email, ep.first_name, ep.last_name
                FROM leave_requests lr
                JOIN users u ON u.id = lr.user_id
                LEFT JOIN employee_profiles ep ON ep.user_id = u.id
                WHERE {where}
                ORDER BY lr.created_at {order}, lr.id {order}
                """,
                tuple(params),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    def decide(self, *, request_id: int, status: LeaveStatus, admin_comments: Optional[str]) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, admin_comments=%s, updated_at=NOW()
                WHERE id=%s AND status=%s
                """,
                (status.value, admin_comments, int(request_id), LeaveStatus.PENDING.value),
            )
            if cur.rowcount == 0:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests lr WHERE lr.id=%s", (int(request_id),))
            return _row_to_request(fetchone(cur))

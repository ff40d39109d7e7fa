from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..core.constants import LOGIN_ID_ALLOCATION_ATTEMPTS
from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_deadlock, is_duplicate_key, like_prefix
from .login_id import next_login_id
from .model import Employee, EmployeeProfile, NewEmployee, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, email, login_id, password_hash, role, password_change_required, created_at, updated_at"

_EMPLOYEE_SELECT = """
    SELECT u.id, u.email, u.login_id, u.password_hash, u.role, u.password_change_required,
           u.created_at, u.updated_at,
           ep.user_id AS profile_user_id, ep.first_name, ep.last_name, ep.phone,
           ep.department, ep.position, ep.hire_date
    FROM users u
    LEFT JOIN employee_profiles ep ON ep.user_id = u.id
"""

PROFILE_COLUMNS = ("first_name", "last_name", "phone", "department", "position", "hire_date")


def row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        email=row["email"],
        login_id=row.get("login_id"),
        password_hash=row["password_hash"],
        role=Role.parse(row["role"]),
        password_change_required=bool(row.get("password_change_required")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def row_to_employee(row: dict) -> Employee:
    profile = None
    if row.get("profile_user_id") is not None:
        profile = EmployeeProfile(
            user_id=int(row["profile_user_id"]),
            first_name=row["first_name"],
            last_name=row["last_name"],
            phone=row.get("phone"),
            department=row.get("department"),
            position=row.get("position"),
            hire_date=row.get("hire_date"),
        )
    return Employee(user=row_to_user(row), profile=profile)


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value: Any) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return row_to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("id", int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email.strip().lower())

    def get_by_login_id(self, login_id: str) -> Optional[User]:
        return self._get_one("login_id", login_id.strip().upper())

    def update_password(self, user_id: int, *, password_hash: str, password_change_required: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET password_hash=%s, password_change_required=%s, updated_at=NOW()
                WHERE id=%s
                """,
                (password_hash, int(password_change_required), int(user_id)),
            )
            return cur.rowcount > 0

    def create_employee(self, new: NewEmployee, *, login_id_prefix: Optional[str]) -> Employee:
        for attempt in range(1, LOGIN_ID_ALLOCATION_ATTEMPTS + 1):
            try:
                return self._insert_employee(new, login_id_prefix)
            except Exception as exc:
                if is_duplicate_key(exc, "uq_users_email"):
                    raise ConflictError("Email already exists", "DUPLICATE_EMAIL") from exc
                if not (is_duplicate_key(exc, "uq_users_login_id") or is_deadlock(exc)):
                    raise
                # Lost the serial to a concurrent create; the next attempt reads the new last id.
                logger.warning("Login id allocation for %s collided (attempt %d)", login_id_prefix, attempt)
        raise ConflictError("Could not allocate a login id, please retry", "LOGIN_ID_CONFLICT")

    def _insert_employee(self, new: NewEmployee, login_id_prefix: Optional[str]) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            login_id = None
            if login_id_prefix:
                cur.execute(
                    """
                    SELECT login_id FROM users
                    WHERE login_id LIKE %s
                    ORDER BY login_id DESC
                    LIMIT 1
                    FOR UPDATE
                    """,
                    (like_prefix(login_id_prefix),),
                )
                last = fetchone(cur)
                login_id = next_login_id(login_id_prefix, last["login_id"] if last else None)

            cur.execute(
                """
                INSERT INTO users(email, login_id, password_hash, role, password_change_required)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (new.email, login_id, new.password_hash, new.role.value, int(new.password_change_required)),
            )
            user_id = int(cur.lastrowid)

            cur.execute(
                """
                INSERT INTO employee_profiles(user_id, first_name, last_name, phone, department, position, hire_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (user_id, new.first_name, new.last_name, new.phone, new.department, new.position, new.hire_date),
            )

            cur.execute(f"{_EMPLOYEE_SELECT} WHERE u.id=%s", (user_id,))
            return row_to_employee(fetchone(cur))

    def get_employee(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_EMPLOYEE_SELECT} WHERE u.id=%s", (int(user_id),))
            row = fetchone(cur)
            return row_to_employee(row) if row else None

    def list_employees(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_EMPLOYEE_SELECT} WHERE u.role=%s ORDER BY ep.first_name, ep.last_name", (Role.EMPLOYEE.value,))
            return [row_to_employee(r) for r in fetchall(cur)]

    def update_employee(
        self,
        user_id: int,
        *,
        email: Optional[str],
        profile_fields: Mapping[str, Any],
    ) -> Optional[Employee]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT id FROM users WHERE id=%s FOR UPDATE", (int(user_id),))
                if not fetchone(cur):
                    return None

                if email is not None:
                    cur.execute("UPDATE users SET email=%s, updated_at=NOW() WHERE id=%s", (email, int(user_id)))

                fields = [(k, v) for k, v in profile_fields.items() if k in PROFILE_COLUMNS]
                if fields:
                    assignments = ", ".join(f"{k}=%s" for k, _ in fields)
                    cur.execute(
                        f"UPDATE employee_profiles SET {assignments}, updated_at=NOW() WHERE user_id=%s",
                        tuple(v for _, v in fields) + (int(user_id),),
                    )

                cur.execute(f"{_EMPLOYEE_SELECT} WHERE u.id=%s", (int(user_id),))
                return row_to_employee(fetchone(cur))
        except Exception as exc:
            if is_duplicate_key(exc, "uq_users_email"):
                raise ConflictError("Email already exists", "DUPLICATE_EMAIL") from exc
            raise

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (int(user_id),))
            return cur.rowcount > 0

from __future__ import annotations

from typing import Optional

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, is_duplicate_key
from ..users.model import NewEmployee, User
from ..users.mysql_user_repository import row_to_user
from .model import Company
from .repository import CompanyRepository


def _row_to_company(row: dict) -> Company:
    return Company(
        company_id=int(row["id"]),
        name=row["name"],
        code=row["code"],
        logo_url=row.get("logo_url"),
        created_at=row.get("created_at"),
    )


class MySQLCompanyRepository(CompanyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS count FROM company")
            row = fetchone(cur)
            return int(row["count"]) if row else 0

    def get(self) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, code, logo_url, created_at FROM company ORDER BY id LIMIT 1")
            row = fetchone(cur)
            return _row_to_company(row) if row else None

    def create_with_admin(
        self,
        *,
        name: str,
        code: str,
        logo_url: Optional[str],
        admin: NewEmployee,
    ) -> tuple[Company, User]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # Authoritative read inside the transaction; uq_company_singleton
                # rejects a concurrent second insert.
                cur.execute("SELECT COUNT(*) AS count FROM company")
                row = fetchone(cur)
                if row and int(row["count"]) > 0:
                    raise ConflictError("Company already exists", "COMPANY_EXISTS")

                cur.execute(
                    "INSERT INTO company(name, code, logo_url) VALUES(%s,%s,%s)",
                    (name, code, logo_url),
                )
                company_id = int(cur.lastrowid)

                cur.execute(
                    """
                    INSERT INTO users(email, password_hash, role, password_change_required)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (admin.email, admin.password_hash, admin.role.value, int(admin.password_change_required)),
                )
                user_id = int(cur.lastrowid)

                cur.execute(
                    "INSERT INTO employee_profiles(user_id, first_name, last_name) VALUES(%s,%s,%s)",
                    (user_id, admin.first_name, admin.last_name),
                )

                cur.execute("SELECT id, name, code, logo_url, created_at FROM company WHERE id=%s", (company_id,))
                company = _row_to_company(fetchone(cur))
                cur.execute(
                    """
                    SELECT id, email, login_id, password_hash, role, password_change_required, created_at, updated_at
                    FROM users WHERE id=%s
                    """,
                    (user_id,),
                )
                user = row_to_user(fetchone(cur))
                return company, user
        except Exception as exc:
            if is_duplicate_key(exc, "uq_company_singleton"):
                raise ConflictError("Company already exists", "COMPANY_EXISTS") from exc
            if is_duplicate_key(exc, "uq_users_email"):
                raise ConflictError("Email already exists", "DUPLICATE_EMAIL") from exc
            raise

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import PayrollEntry
from .repository import PayrollRepository

_COLUMNS = "p.id, p.user_id, p.month, p.year, p.base_salary, p.deductions, p.net_salary, p.created_at, p.updated_at"

UPDATABLE_COLUMNS = ("month", "year", "base_salary", "deductions", "net_salary")


def _row_to_entry(r: dict) -> PayrollEntry:
    return PayrollEntry(
        payroll_id=int(r["id"]),
        user_id=int(r["user_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        base_salary=Decimal(str(r["base_salary"])),
        deductions=Decimal(str(r["deductions"])),
        net_salary=Decimal(str(r["net_salary"])),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        email=r.get("email"),
        first_name=r.get("first_name"),
        last_name=r.get("last_name"),
    )


def _duplicate_payroll() -> ConflictError:
    return ConflictError("Payroll entry already exists for this user, month, and year", "DUPLICATE_PAYROLL")


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        month: int,
        year: int,
        base_salary: Decimal,
        deductions: Decimal,
        net_salary: Decimal,
    ) -> PayrollEntry:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO payroll(user_id, month, year, base_salary, deductions, net_salary)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (int(user_id), int(month), int(year), base_salary, deductions, net_salary),
                )
                cur.execute(f"SELECT {_COLUMNS} FROM payroll p WHERE p.id=%s", (int(cur.lastrowid),))
                return _row_to_entry(fetchone(cur))
        except Exception as exc:
            if is_duplicate_key(exc, "uq_payroll_period"):
                raise _duplicate_payroll() from exc
            raise

    def get(self, payroll_id: int) -> Optional[PayrollEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll p WHERE p.id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def list_entries(self, *, user_id: Optional[int] = None, with_user: bool = True) -> Sequence[PayrollEntry]:
        where = ""
        params: tuple = ()
        if user_id is not None:
            where = "WHERE p.user_id=%s"
            params = (int(user_id),)

        if with_user:
            sql = f"""
                SELECT {_COLUMNS}, u.email, ep.first_name, ep.last_name
                FROM payroll p
                JOIN users u ON u.id = p.user_id
                LEFT JOIN employee_profiles ep ON ep.user_id = u.id
                {where}
                ORDER BY p.year DESC, p.month DESC, ep.first_name, ep.last_name
            """
        else:
            sql = f"SELECT {_COLUMNS} FROM payroll p {where} ORDER BY p.year DESC, p.month DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_entry(r) for r in fetchall(cur)]

    def update(self, payroll_id: int, fields: Mapping[str, Any]) -> Optional[PayrollEntry]:
        items = [(k, v) for k, v in fields.items() if k in UPDATABLE_COLUMNS]
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                if items:
                    assignments = ", ".join(f"{k}=%s" for k, _ in items)
                    cur.execute(
                        f"UPDATE payroll SET {assignments}, updated_at=NOW() WHERE id=%s",
                        tuple(v for _, v in items) + (int(payroll_id),),
                    )
                cur.execute(f"SELECT {_COLUMNS} FROM payroll p WHERE p.id=%s", (int(payroll_id),))
                r = fetchone(cur)
                return _row_to_entry(r) if r else None
        except Exception as exc:
            if is_duplicate_key(exc, "uq_payroll_period"):
                raise _duplicate_payroll() from exc
            raise

    def delete(self, payroll_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payroll WHERE id=%s", (int(payroll_id),))
            return cur.rowcount > 0

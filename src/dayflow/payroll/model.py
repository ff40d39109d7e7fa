from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import iso


@dataclass(frozen=True)
class PayrollEntry:
    """One salary record per user per (month, year)."""

    payroll_id: int
    user_id: int
    month: int
    year: int
    base_salary: Decimal
    deductions: Decimal
    net_salary: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "id": self.payroll_id,
            "user_id": self.user_id,
            "month": self.month,
            "year": self.year,
            "base_salary": str(self.base_salary),
            "deductions": str(self.deductions),
            "net_salary": str(self.net_salary),
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
        if self.email is not None:
            out.update(email=self.email, first_name=self.first_name, last_name=self.last_name)
        return out

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import PayrollEntry


class PayrollRepository(Protocol):
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
        """Raises ConflictError DUPLICATE_PAYROLL for an existing (user, month, year)."""
        raise NotImplementedError

    def get(self, payroll_id: int) -> Optional[PayrollEntry]:
        raise NotImplementedError

    def list_entries(self, *, user_id: Optional[int] = None, with_user: bool = True) -> Sequence[PayrollEntry]:
        """Newest period first."""
        raise NotImplementedError

    def update(self, payroll_id: int, fields: Mapping[str, Any]) -> Optional[PayrollEntry]:
        raise NotImplementedError

    def delete(self, payroll_id: int) -> bool:
        raise NotImplementedError

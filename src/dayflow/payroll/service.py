from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.validators import is_blank, parse_int, parse_money, require_fields
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollEntry
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


def _parse_month(value: Any) -> int:
    month = parse_int(value, "Month", code="INVALID_MONTH")
    if month < 1 or month > 12:
        raise ValidationError("Month must be between 1 and 12", "INVALID_MONTH")
    return month


def _parse_year(value: Any) -> int:
    year = parse_int(value, "Year")
    if year < 1900 or year > 9999:
        raise ValidationError("Year is out of range", "INVALID_NUMERIC_VALUE")
    return year


class PayrollService:
    def __init__(
        self,
        payroll: PayrollRepository,
        users: UserRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payroll = payroll
        self._users = users
        self._calculator = calculator or StandardPayrollCalculator()

    def my_payroll(self, user_id: int) -> list[PayrollEntry]:
        return list(self._payroll.list_entries(user_id=int(user_id), with_user=False))

    def list_all(self) -> list[PayrollEntry]:
        return list(self._payroll.list_entries())

    def for_user(self, user_id: int) -> list[PayrollEntry]:
        return list(self._payroll.list_entries(user_id=int(user_id)))

    def create(self, payload: Mapping[str, Any]) -> PayrollEntry:
        require_fields(
            payload,
            ("user_id", "month", "year", "base_salary"),
            "User ID, month, year, and base salary are required",
        )
        user_id = parse_int(payload["user_id"], "User ID")
        month = _parse_month(payload["month"])
        year = _parse_year(payload["year"])
        base_salary = parse_money(payload["base_salary"], "Base salary")
        deductions = Decimal("0")
        if not is_blank(payload.get("deductions")):
            deductions = parse_money(payload["deductions"], "Deductions")

        if is_blank(payload.get("net_salary")):
            net_salary = self._calculator.net_salary(base_salary, deductions)
        else:
            net_salary = parse_money(payload["net_salary"], "Net salary")

        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found", "USER_NOT_FOUND")

        entry = self._payroll.create(
            user_id=user_id,
            month=month,
            year=year,
            base_salary=base_salary,
            deductions=deductions,
            net_salary=net_salary,
        )
        logger.info("Payroll %s created for user %s (%02d/%d)", entry.payroll_id, user_id, month, year)
        return entry

    def update(self, payroll_id: int, payload: Mapping[str, Any]) -> PayrollEntry:
        current = self._payroll.get(int(payroll_id))
        if not current:
            raise NotFoundError("Payroll entry not found", "PAYROLL_NOT_FOUND")

        fields: dict[str, Any] = {}
        if payload.get("month") is not None:
            fields["month"] = _parse_month(payload["month"])
        if payload.get("year") is not None:
            fields["year"] = _parse_year(payload["year"])
        if payload.get("base_salary") is not None:
            fields["base_salary"] = parse_money(payload["base_salary"], "Base salary")
        if payload.get("deductions") is not None:
            fields["deductions"] = parse_money(payload["deductions"], "Deductions")
        if payload.get("net_salary") is not None:
            fields["net_salary"] = parse_money(payload["net_salary"], "Net salary")

        if not fields:
            raise ValidationError("No fields to update", "NO_UPDATES")

        # Keep net salary consistent when only its inputs change.
        if "net_salary" not in fields and ("base_salary" in fields or "deductions" in fields):
            fields["net_salary"] = self._calculator.net_salary(
                fields.get("base_salary", current.base_salary),
                fields.get("deductions", current.deductions),
            )

        updated = self._payroll.update(current.payroll_id, fields)
        if not updated:
            raise NotFoundError("Payroll entry not found", "PAYROLL_NOT_FOUND")
        return updated

    def delete(self, payroll_id: int) -> int:
        if not self._payroll.delete(int(payroll_id)):
            raise NotFoundError("Payroll entry not found", "PAYROLL_NOT_FOUND")
        return int(payroll_id)

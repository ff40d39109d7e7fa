from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from .base import PayrollCalculator

CENTS = Decimal("0.01")


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: base - deductions, not below 0, rounded to cents."""

    def net_salary(self, base_salary: Decimal, deductions: Decimal) -> Decimal:
        net = max(base_salary - deductions, Decimal("0"))
        return net.quantize(CENTS, rounding=ROUND_HALF_UP)

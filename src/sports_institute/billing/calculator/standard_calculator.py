from __future__ import annotations

from decimal import Decimal

from ...common.numbers import round_half_up
from ...core.exceptions import ValidationError
from .base import SalaryCalculator, SalaryFigures


class ProRataSalaryCalculator(SalaryCalculator):
    """Standard rule: monthly / days in month x present days, rounded once at the end."""

    def compute(self, *, monthly_salary: Decimal, total_days: int, present_days: int) -> SalaryFigures:
        if total_days <= 0:
            raise ValidationError("Month must have at least one day")
        if present_days < 0 or present_days > total_days:
            raise ValidationError("Present days must be between 0 and the days in the month")

        per_day = Decimal(monthly_salary) / Decimal(total_days)
        return SalaryFigures(
            total_days=total_days,
            present_days=present_days,
            absent_days=total_days - present_days,
            per_day_salary=per_day,
            payable_salary=round_half_up(per_day * present_days),
        )


def fee_final_amount(base_fee: Decimal, discount: Decimal, extra_charges: Decimal) -> Decimal:
    return base_fee - discount + extra_charges

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SalaryFigures:
    total_days: int
    present_days: int
    absent_days: int
    per_day_salary: Decimal
    payable_salary: int


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, *, monthly_salary: Decimal, total_days: int, present_days: int) -> SalaryFigures:
        raise NotImplementedError

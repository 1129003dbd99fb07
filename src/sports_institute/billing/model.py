from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import FeeStatus, PaymentMode, SalaryStatus


@dataclass(frozen=True)
class FeeRecord:
    """Domain entity: a trainer-student's fee for one month."""

    fee_id: int
    trainer_ref: str
    student_ref: str
    student_uid: str
    student_name: str
    month: int
    year: int
    base_fee: Decimal
    discount: Decimal
    extra_charges: Decimal
    final_amount: Decimal
    payment_mode: PaymentMode
    receipt_no: str
    status: FeeStatus
    remarks: str
    created_at: datetime
    paid_at: Optional[datetime] = None

    @property
    def period(self) -> tuple[int, int]:
        return self.year, self.month


@dataclass(frozen=True)
class SalaryRecord:
    """Domain entity: a trainer's pro-rated salary for one month (YYYY-MM)."""

    institute_id: str
    salary_key: str
    trainer_ref: str
    trainer_name: str
    month: str
    total_days: int
    present_days: int
    absent_days: int
    monthly_salary: Decimal
    per_day_salary: Decimal
    payable_salary: int
    status: SalaryStatus
    generated_at: datetime
    paid_at: Optional[datetime] = None
    payment_mode: Optional[PaymentMode] = None


def salary_key_for(trainer_ref: str, month: str) -> str:
    return f"{trainer_ref}_{month}"

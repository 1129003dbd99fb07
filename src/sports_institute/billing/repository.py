from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentMode
from .model import FeeRecord, SalaryRecord


class FeeRepository(Protocol):
    def get(self, fee_id: int) -> Optional[FeeRecord]:
        raise NotImplementedError

    def find_for_period(self, *, student_ref: str, month: int, year: int) -> Optional[FeeRecord]:
        raise NotImplementedError

    def list_for_student(self, *, trainer_ref: str, student_ref: str) -> Sequence[FeeRecord]:
        raise NotImplementedError

    def list_for_member(self, uid: str) -> Sequence[FeeRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        trainer_ref: str,
        student_ref: str,
        student_uid: str,
        student_name: str,
        month: int,
        year: int,
        base_fee: Decimal,
        discount: Decimal,
        extra_charges: Decimal,
        final_amount: Decimal,
        payment_mode: PaymentMode,
        receipt_no: str,
        remarks: str,
        created_at: datetime,
    ) -> int:
        """Insert a pending fee.

        Raises DuplicatePeriodError when the student already has a fee for
        (month, year).
        """

        raise NotImplementedError

    def mark_paid(self, *, fee_id: int, paid_at: datetime) -> bool:
        """pending -> paid. Returns False when the fee is missing or not pending."""

        raise NotImplementedError

    def delete(self, fee_id: int) -> bool:
        raise NotImplementedError


class SalaryRepository(Protocol):
    def get(self, *, institute_id: str, salary_key: str) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def list_for_month(self, *, institute_id: str, month: str) -> Sequence[SalaryRecord]:
        raise NotImplementedError

    def upsert(self, record: SalaryRecord) -> None:
        """Store the record under (institute_id, salary_key), replacing any previous one."""

        raise NotImplementedError

    def mark_paid(self, *, institute_id: str, salary_key: str, paid_at: datetime, payment_mode: PaymentMode) -> bool:
        """generated -> paid. Returns False when missing or not generated."""

        raise NotImplementedError

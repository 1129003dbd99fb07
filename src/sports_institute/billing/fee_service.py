from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_choice, require_non_negative, require_positive
from ..core.enums import FeeStatus, PaymentMode
from ..core.exceptions import DuplicatePeriodError, ValidationError
from ..database.errors import remote_operation
from ..members.model import TrainerStudent
from ..members.repository import MemberRepository
from .calculator.standard_calculator import fee_final_amount
from .model import FeeRecord
from .receipts import ReceiptNumberGenerator
from .repository import FeeRepository

logger = logging.getLogger(__name__)


def _require_period(month, year) -> tuple[int, int]:
    try:
        month_no = int(month)
        year_no = int(year)
    except (TypeError, ValueError):
        raise ValidationError("Month and year are required")
    if not 1 <= month_no <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1 <= year_no <= 9999:
        raise ValidationError("Year is invalid")
    return month_no, year_no


class FeeService:
    """Monthly fees a trainer bills to their own students.

    A period (month, year) can be billed once per student: generating it
    again is refused, unlike salaries which are recomputed in place.
    """

    def __init__(
        self,
        fees: FeeRepository,
        members: MemberRepository,
        *,
        receipts: Optional[ReceiptNumberGenerator] = None,
    ):
        self._fees = fees
        self._members = members
        self._receipts = receipts or ReceiptNumberGenerator()

    def _student_of(self, trainer_ref: str, student_ref: str) -> TrainerStudent:
        student = self._members.get_trainer_student(student_ref)
        if not student or student.trainer_ref != trainer_ref:
            raise ValidationError("Select a student")
        return student

    def generate_fee(
        self,
        trainer_ref: str,
        student_ref: str,
        *,
        month,
        year,
        base_fee=None,
        discount=0,
        extra_charges=0,
        payment_mode=PaymentMode.CASH,
        remarks: str = "",
        now: datetime | None = None,
    ) -> FeeRecord:
        now = now or now_local()
        month_no, year_no = _require_period(month, year)
        mode = require_choice(payment_mode, PaymentMode, "Payment mode")
        remarks = (remarks or "").strip()

        with remote_operation("generate the fee", logger):
            student = self._student_of(trainer_ref, student_ref)

            base = require_positive(student.fee_amount if base_fee is None else base_fee, "Base fee")
            disc = require_non_negative(discount, "Discount")
            extra = require_non_negative(extra_charges, "Extra charges")
            if disc > base:
                raise ValidationError("Discount cannot exceed the base fee")

            if self._fees.find_for_period(student_ref=student_ref, month=month_no, year=year_no):
                raise DuplicatePeriodError("Fee already generated for this month")

            final_amount = fee_final_amount(base, disc, extra)
            receipt_no = self._receipts.next(now)

            fee_id = self._fees.create(
                trainer_ref=trainer_ref,
                student_ref=student_ref,
                student_uid=student.student_uid,
                student_name=student.full_name,
                month=month_no,
                year=year_no,
                base_fee=base,
                discount=disc,
                extra_charges=extra,
                final_amount=final_amount,
                payment_mode=mode,
                receipt_no=receipt_no,
                remarks=remarks,
                created_at=now,
            )

        logger.info(
            "Fee generated: student=%s period=%s/%s amount=%s receipt=%s",
            student_ref,
            month_no,
            year_no,
            final_amount,
            receipt_no,
        )
        return FeeRecord(
            fee_id=fee_id,
            trainer_ref=trainer_ref,
            student_ref=student_ref,
            student_uid=student.student_uid,
            student_name=student.full_name,
            month=month_no,
            year=year_no,
            base_fee=base,
            discount=disc,
            extra_charges=extra,
            final_amount=final_amount,
            payment_mode=mode,
            receipt_no=receipt_no,
            status=FeeStatus.PENDING,
            remarks=remarks,
            created_at=now,
        )

    def _owned_fee(self, trainer_ref: str, student_ref: str, fee_id: int) -> FeeRecord:
        fee = self._fees.get(int(fee_id))
        if not fee or fee.trainer_ref != trainer_ref or fee.student_ref != student_ref:
            raise ValidationError("Fee record does not exist")
        return fee

    def mark_paid(
        self,
        trainer_ref: str,
        student_ref: str,
        fee_id: int,
        *,
        now: datetime | None = None,
    ) -> None:
        now = now or now_local()
        with remote_operation("update the fee", logger):
            fee = self._owned_fee(trainer_ref, student_ref, fee_id)
            if fee.status == FeeStatus.PAID:
                raise ValidationError("Fee is already paid")
            if not self._fees.mark_paid(fee_id=fee.fee_id, paid_at=now):
                raise ValidationError("Fee is already paid")
        logger.info("Fee %s marked paid (receipt=%s)", fee.fee_id, fee.receipt_no)

    def delete_fee(self, trainer_ref: str, student_ref: str, fee_id: int) -> None:
        with remote_operation("delete the fee", logger):
            fee = self._owned_fee(trainer_ref, student_ref, fee_id)
            if not self._fees.delete(fee.fee_id):
                raise ValidationError("Delete failed")
        logger.info("Fee %s deleted (status was %s)", fee.fee_id, fee.status.value)

    def fee_history(self, trainer_ref: str, student_ref: str) -> Sequence[FeeRecord]:
        with remote_operation("load fee history", logger):
            rows = self._fees.list_for_student(trainer_ref=trainer_ref, student_ref=student_ref)
        return sorted(rows, key=lambda f: f.period, reverse=True)

    def fees_for_member(self, uid: str) -> Sequence[FeeRecord]:
        with remote_operation("load fees", logger):
            rows = self._fees.list_for_member(uid)
        return sorted(rows, key=lambda f: f.period, reverse=True)

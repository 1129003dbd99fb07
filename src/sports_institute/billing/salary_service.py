from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..checkins.repository import CheckinRepository
from ..common.datetime_utils import days_in_month, now_local, parse_month
from ..common.validators import require_choice
from ..core.enums import PaymentMode, SalaryStatus
from ..core.exceptions import ValidationError
from ..database.errors import remote_operation
from ..members.repository import MemberRepository
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import ProRataSalaryCalculator
from .model import SalaryRecord, salary_key_for
from .repository import SalaryRepository

logger = logging.getLogger(__name__)

STATUS_FILTERS = {"all"} | {s.value for s in SalaryStatus}


@dataclass(frozen=True)
class SalaryBoardRow:
    trainer_ref: str
    trainer_name: str
    status: SalaryStatus
    record: Optional[SalaryRecord] = None


def _normalize_month(month: str) -> str:
    year, month_no = parse_month(month)
    return f"{year:04d}-{month_no:02d}"


class SalaryService:
    """Trainer payroll: monthly salary pro-rated by checked-in days.

    Records are keyed by "{trainer}_{month}", so generating a month again
    recomputes and replaces the stored record.
    """

    def __init__(
        self,
        salaries: SalaryRepository,
        members: MemberRepository,
        checkins: CheckinRepository,
        *,
        calculator: Optional[SalaryCalculator] = None,
    ):
        self._salaries = salaries
        self._members = members
        self._checkins = checkins
        self._calculator = calculator or ProRataSalaryCalculator()

    def generate_salary(
        self,
        institute_id: str,
        trainer_ref: str,
        month: str,
        *,
        now: datetime | None = None,
    ) -> SalaryRecord:
        now = now or now_local()
        month = _normalize_month(month)
        key = salary_key_for(trainer_ref, month)

        with remote_operation("generate the salary", logger):
            trainer = self._members.get_trainer(trainer_ref)
            if not trainer or trainer.institute_id != institute_id:
                raise ValidationError("Trainer does not belong to this institute")
            if trainer.monthly_salary <= 0:
                raise ValidationError("Trainer has no monthly salary set")

            existing = self._salaries.get(institute_id=institute_id, salary_key=key)
            if existing and existing.status == SalaryStatus.PAID:
                raise ValidationError("Salary for this month is already paid")

            present_days = self._checkins.count_present(
                institute_id=institute_id, trainer_ref=trainer_ref, month=month
            )
            figures = self._calculator.compute(
                monthly_salary=trainer.monthly_salary,
                total_days=days_in_month(month),
                present_days=present_days,
            )

            record = SalaryRecord(
                institute_id=institute_id,
                salary_key=key,
                trainer_ref=trainer_ref,
                trainer_name=trainer.first_name,
                month=month,
                total_days=figures.total_days,
                present_days=figures.present_days,
                absent_days=figures.absent_days,
                monthly_salary=trainer.monthly_salary,
                per_day_salary=figures.per_day_salary,
                payable_salary=figures.payable_salary,
                status=SalaryStatus.GENERATED,
                generated_at=now,
            )
            self._salaries.upsert(record)

        logger.info(
            "Salary %s %s: %s/%s days, payable=%s",
            "regenerated" if existing else "generated",
            key,
            figures.present_days,
            figures.total_days,
            figures.payable_salary,
        )
        return record

    def mark_salary_paid(
        self,
        institute_id: str,
        salary_key: str,
        *,
        payment_mode=PaymentMode.CASH,
        now: datetime | None = None,
    ) -> None:
        now = now or now_local()
        mode = require_choice(payment_mode, PaymentMode, "Payment mode")

        with remote_operation("mark the salary paid", logger):
            record = self._salaries.get(institute_id=institute_id, salary_key=salary_key)
            if not record:
                raise ValidationError("Salary has not been generated")
            if record.status != SalaryStatus.GENERATED:
                raise ValidationError("Salary is already paid")
            if not self._salaries.mark_paid(
                institute_id=institute_id, salary_key=salary_key, paid_at=now, payment_mode=mode
            ):
                raise ValidationError("Salary is already paid")

        logger.info("Salary %s paid via %s", salary_key, mode.value)

    def salary_board(self, institute_id: str, month: str, status_filter: str = "all") -> list[SalaryBoardRow]:
        """One row per institute trainer; trainers without a record show as pending."""
        month = _normalize_month(month)
        status_filter = (status_filter or "all").strip().lower()
        if status_filter not in STATUS_FILTERS:
            raise ValidationError("Status filter is invalid")

        with remote_operation("load salaries", logger):
            trainers = self._members.list_trainers(institute_id)
            records = {r.trainer_ref: r for r in self._salaries.list_for_month(institute_id=institute_id, month=month)}

        rows = []
        for trainer in trainers:
            record = records.get(trainer.trainer_ref)
            status = record.status if record else SalaryStatus.PENDING
            if status_filter != "all" and status.value != status_filter:
                continue
            rows.append(
                SalaryBoardRow(
                    trainer_ref=trainer.trainer_ref,
                    trainer_name=trainer.first_name,
                    status=status,
                    record=record,
                )
            )
        return rows

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import PaymentMode, SalaryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import SalaryRecord
from .repository import SalaryRepository

_COLUMNS = """
    institute_id, salary_key, trainer_ref, trainer_name, month, total_days,
    present_days, absent_days, monthly_salary, per_day_salary, payable_salary,
    status, generated_at, paid_at, payment_mode
"""

# A paid month keeps every column; status is assigned last so the other
# IF()s still see the stored value.
_KEEP_PAID = ",\n".join(
    f"{col}=IF(status='{SalaryStatus.PAID.value}', {col}, VALUES({col}))"
    for col in (
        "trainer_ref", "trainer_name", "month", "total_days", "present_days", "absent_days",
        "monthly_salary", "per_day_salary", "payable_salary", "generated_at", "paid_at",
        "payment_mode", "status",
    )
)


def _salary(r: dict) -> SalaryRecord:
    return SalaryRecord(
        institute_id=r["institute_id"],
        salary_key=r["salary_key"],
        trainer_ref=r["trainer_ref"],
        trainer_name=r.get("trainer_name") or "",
        month=r["month"],
        total_days=int(r["total_days"]),
        present_days=int(r["present_days"]),
        absent_days=int(r["absent_days"]),
        monthly_salary=as_decimal(r["monthly_salary"]),
        per_day_salary=as_decimal(r["per_day_salary"]),
        payable_salary=int(r["payable_salary"]),
        status=SalaryStatus(r["status"]),
        generated_at=r["generated_at"],
        paid_at=r.get("paid_at"),
        payment_mode=PaymentMode(r["payment_mode"]) if r.get("payment_mode") else None,
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, institute_id: str, salary_key: str) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM trainer_salaries WHERE institute_id=%s AND salary_key=%s",
                (institute_id, salary_key),
            )
            r = fetchone(cur)
            return _salary(r) if r else None

    def list_for_month(self, *, institute_id: str, month: str) -> Sequence[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM trainer_salaries
                WHERE institute_id=%s AND month=%s
                ORDER BY trainer_name
                """,
                (institute_id, month),
            )
            return [_salary(r) for r in fetchall(cur)]

    def upsert(self, record: SalaryRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO trainer_salaries(
                    institute_id, salary_key, trainer_ref, trainer_name, month, total_days,
                    present_days, absent_days, monthly_salary, per_day_salary, payable_salary,
                    status, generated_at, paid_at, payment_mode
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                {_KEEP_PAID}
                """,
                (
                    record.institute_id,
                    record.salary_key,
                    record.trainer_ref,
                    record.trainer_name,
                    record.month,
                    record.total_days,
                    record.present_days,
                    record.absent_days,
                    record.monthly_salary,
                    record.per_day_salary,
                    record.payable_salary,
                    record.status.value,
                    record.generated_at,
                    record.paid_at,
                    record.payment_mode.value if record.payment_mode else None,
                ),
            )

    def mark_paid(self, *, institute_id: str, salary_key: str, paid_at: datetime, payment_mode: PaymentMode) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE trainer_salaries
                SET status=%s, paid_at=%s, payment_mode=%s
                WHERE institute_id=%s AND salary_key=%s AND status=%s
                """,
                (
                    SalaryStatus.PAID.value,
                    paid_at,
                    payment_mode.value,
                    institute_id,
                    salary_key,
                    SalaryStatus.GENERATED.value,
                ),
            )
            return cur.rowcount > 0

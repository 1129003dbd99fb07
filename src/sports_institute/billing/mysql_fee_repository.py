from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import FeeStatus, PaymentMode
from ..core.exceptions import DuplicatePeriodError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import FeeRecord
from .repository import FeeRepository

_COLUMNS = """
    fee_id, trainer_ref, student_ref, student_uid, student_name, month, year,
    base_fee, discount, extra_charges, final_amount, payment_mode, receipt_no,
    status, remarks, created_at, paid_at
"""


def _fee(r: dict) -> FeeRecord:
    return FeeRecord(
        fee_id=int(r["fee_id"]),
        trainer_ref=r["trainer_ref"],
        student_ref=r["student_ref"],
        student_uid=r.get("student_uid") or "",
        student_name=r.get("student_name") or "",
        month=int(r["month"]),
        year=int(r["year"]),
        base_fee=as_decimal(r["base_fee"]),
        discount=as_decimal(r["discount"]),
        extra_charges=as_decimal(r["extra_charges"]),
        final_amount=as_decimal(r["final_amount"]),
        payment_mode=PaymentMode(r["payment_mode"]),
        receipt_no=r["receipt_no"],
        status=FeeStatus(r["status"]),
        remarks=r.get("remarks") or "",
        created_at=r["created_at"],
        paid_at=r.get("paid_at"),
    )


class MySQLFeeRepository(FeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, fee_id: int) -> Optional[FeeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM trainer_student_fees WHERE fee_id=%s", (int(fee_id),))
            r = fetchone(cur)
            return _fee(r) if r else None

    def find_for_period(self, *, student_ref: str, month: int, year: int) -> Optional[FeeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM trainer_student_fees
                WHERE student_ref=%s AND month=%s AND year=%s
                """,
                (student_ref, int(month), int(year)),
            )
            r = fetchone(cur)
            return _fee(r) if r else None

    def list_for_student(self, *, trainer_ref: str, student_ref: str) -> Sequence[FeeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM trainer_student_fees
                WHERE trainer_ref=%s AND student_ref=%s
                ORDER BY year DESC, month DESC
                """,
                (trainer_ref, student_ref),
            )
            return [_fee(r) for r in fetchall(cur)]

    def list_for_member(self, uid: str) -> Sequence[FeeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM trainer_student_fees
                WHERE student_ref=%s OR student_uid=%s
                ORDER BY year DESC, month DESC
                """,
                (uid, uid),
            )
            return [_fee(r) for r in fetchall(cur)]

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO trainer_student_fees(
                        trainer_ref, student_ref, student_uid, student_name, month, year,
                        base_fee, discount, extra_charges, final_amount, payment_mode,
                        receipt_no, status, remarks, created_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        trainer_ref,
                        student_ref,
                        student_uid,
                        student_name,
                        int(month),
                        int(year),
                        base_fee,
                        discount,
                        extra_charges,
                        final_amount,
                        payment_mode.value,
                        receipt_no,
                        FeeStatus.PENDING.value,
                        remarks,
                        created_at,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError:
            # uq_fee_period: another request generated this period first.
            raise DuplicatePeriodError("Fee already generated for this month")

    def mark_paid(self, *, fee_id: int, paid_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE trainer_student_fees
                SET status=%s, paid_at=%s
                WHERE fee_id=%s AND status=%s
                """,
                (FeeStatus.PAID.value, paid_at, int(fee_id), FeeStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def delete(self, fee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM trainer_student_fees WHERE fee_id=%s", (int(fee_id),))
            return cur.rowcount > 0

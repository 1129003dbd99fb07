from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, SlotTime, Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord, NewAttendance
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, institute_id, record_date, day, time, category,
    trainer_ref, student_ref, student_name, status, created_at
"""


def _record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        institute_id=r["institute_id"],
        record_date=r["record_date"],
        day=Weekday(r["day"]),
        time=SlotTime(r["time"]),
        category=r["category"],
        trainer_ref=r["trainer_ref"],
        student_ref=r["student_ref"],
        student_name=r.get("student_name") or "",
        status=AttendanceStatus(r["status"]),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save_batch(self, records: Sequence[NewAttendance], *, replace_existing: bool) -> int:
        if not records:
            return 0

        with db_cursor(self._conn_factory) as (_, cur):
            if replace_existing:
                for rec in records:
                    cur.execute(
                        """
                        DELETE FROM attendance_records
                        WHERE institute_id=%s AND student_ref=%s AND record_date=%s AND category=%s
                        """,
                        (rec.institute_id, rec.student_ref, rec.record_date, rec.category),
                    )

            cur.executemany(
                """
                INSERT INTO attendance_records(
                    institute_id, record_date, day, time, category,
                    trainer_ref, student_ref, student_name, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                [
                    (
                        rec.institute_id,
                        rec.record_date,
                        rec.day.value,
                        rec.time.value,
                        rec.category,
                        rec.trainer_ref,
                        rec.student_ref,
                        rec.student_name,
                        rec.status.value,
                    )
                    for rec in records
                ],
            )
            return len(records)

    def list_for_class(
        self,
        *,
        institute_id: str,
        trainer_ref: str,
        category: str,
        record_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["institute_id=%s", "trainer_ref=%s", "category=%s"]
        params: list[object] = [institute_id, trainer_ref, category]
        if record_date is not None:
            clauses.append("record_date=%s")
            params.append(record_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY record_date ASC, record_id ASC
                """,
                tuple(params),
            )
            return [_record(r) for r in fetchall(cur)]

    def list_for_student(
        self,
        *,
        student_ref: str,
        institute_id: Optional[str] = None,
        limit: int = 100,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["student_ref=%s"]
        params: list[object] = [student_ref]
        if institute_id is not None:
            clauses.append("institute_id=%s")
            params.append(institute_id)
        params.append(int(limit))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY record_date DESC, record_id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_record(r) for r in fetchall(cur)]

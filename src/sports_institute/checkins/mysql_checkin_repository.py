from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TrainerCheckin
from .repository import CheckinRepository


def _checkin(r: dict) -> TrainerCheckin:
    return TrainerCheckin(
        checkin_id=int(r["checkin_id"]),
        institute_id=r["institute_id"],
        trainer_ref=r["trainer_ref"],
        work_date=r["work_date"],
        month=r["month"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
    )


class MySQLCheckinRepository(CheckinRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_trainer_and_date(self, trainer_ref: str, work_date: date) -> Optional[TrainerCheckin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT checkin_id, institute_id, trainer_ref, work_date, month, check_in_time, check_out_time, status
                FROM trainer_checkins
                WHERE trainer_ref=%s AND work_date=%s
                """,
                (trainer_ref, work_date),
            )
            r = fetchone(cur)
            return _checkin(r) if r else None

    def get_recent_for_trainer(self, trainer_ref: str, limit: int) -> Sequence[TrainerCheckin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT checkin_id, institute_id, trainer_ref, work_date, month, check_in_time, check_out_time, status
                FROM trainer_checkins
                WHERE trainer_ref=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (trainer_ref, int(limit)),
            )
            return [_checkin(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        institute_id: str,
        trainer_ref: str,
        work_date: date,
        month: str,
        check_in_time: datetime,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO trainer_checkins(institute_id, trainer_ref, work_date, month, check_in_time, status)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (institute_id, trainer_ref, work_date, month, check_in_time, AttendanceStatus.PRESENT.value),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError:
            # uq_checkin_day: a concurrent request checked in first.
            raise ValidationError("You have already checked in today")

    def update_checkout(self, *, checkin_id: int, check_out_time: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE trainer_checkins SET check_out_time=%s WHERE checkin_id=%s",
                (check_out_time, int(checkin_id)),
            )
            return cur.rowcount > 0

    def count_present(self, *, institute_id: str, trainer_ref: str, month: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS present_days
                FROM trainer_checkins
                WHERE institute_id=%s AND trainer_ref=%s AND month=%s AND status=%s
                """,
                (institute_id, trainer_ref, month, AttendanceStatus.PRESENT.value),
            )
            r = fetchone(cur)
            return int(r["present_days"]) if r else 0

from __future__ import annotations

from typing import Sequence

from ..core.enums import SlotTime, Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_refs, fetchall, fetchone, load_refs
from .model import ScheduleSlot
from .repository import ScheduleRepository

_COLUMNS = """
    slot_id, institute_id, day, time, category, trainer_ref, trainer_name,
    student_refs, created_at, updated_at
"""


def _slot(r: dict) -> ScheduleSlot:
    return ScheduleSlot(
        slot_id=int(r["slot_id"]),
        institute_id=r["institute_id"],
        day=Weekday(r["day"]),
        time=SlotTime(r["time"]),
        category=r["category"],
        trainer_ref=r["trainer_ref"],
        trainer_name=r.get("trainer_name") or "",
        student_refs=load_refs(r.get("student_refs")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_institute(self, *, institute_id: str) -> Sequence[ScheduleSlot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM timetable_slots WHERE institute_id=%s ORDER BY slot_id",
                (institute_id,),
            )
            return [_slot(r) for r in fetchall(cur)]

    def list_for_trainer(self, *, institute_id: str, trainer_ref: str) -> Sequence[ScheduleSlot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM timetable_slots
                WHERE institute_id=%s AND trainer_ref=%s
                ORDER BY slot_id
                """,
                (institute_id, trainer_ref),
            )
            return [_slot(r) for r in fetchall(cur)]

    def upsert(
        self,
        *,
        institute_id: str,
        day: Weekday,
        time: SlotTime,
        category: str,
        trainer_ref: str,
        trainer_name: str,
        student_refs: Sequence[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timetable_slots(institute_id, day, time, category, trainer_ref, trainer_name, student_refs)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    category=VALUES(category),
                    trainer_ref=VALUES(trainer_ref),
                    trainer_name=VALUES(trainer_name),
                    student_refs=VALUES(student_refs)
                """,
                (institute_id, day.value, time.value, category, trainer_ref, trainer_name, dump_refs(student_refs)),
            )

            # If it was an update, lastrowid can be 0; fetch slot_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT slot_id FROM timetable_slots WHERE institute_id=%s AND day=%s AND time=%s",
                (institute_id, day.value, time.value),
            )
            r = fetchone(cur)
            return int(r["slot_id"]) if r else 0

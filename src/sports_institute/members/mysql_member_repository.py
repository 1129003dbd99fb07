from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import Account, Institute, Student, Trainer, TrainerStudent
from .repository import MemberRepository


def _student(r: dict) -> Student:
    return Student(
        student_id=r["student_id"],
        institute_id=r["institute_id"],
        first_name=r["first_name"],
        last_name=r.get("last_name") or "",
    )


def _trainer(r: dict) -> Trainer:
    return Trainer(
        trainer_ref=r["trainer_ref"],
        institute_id=r["institute_id"],
        first_name=r["first_name"],
        last_name=r.get("last_name") or "",
        monthly_salary=as_decimal(r.get("monthly_salary")),
    )


def _trainer_student(r: dict) -> TrainerStudent:
    return TrainerStudent(
        doc_id=r["doc_id"],
        trainer_ref=r["trainer_ref"],
        student_uid=r["student_uid"],
        first_name=r["first_name"],
        last_name=r.get("last_name") or "",
        fee_amount=as_decimal(r.get("fee_amount")),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_account_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT uid, email, password_hash FROM accounts WHERE email=%s", (email,))
            r = fetchone(cur)
            if not r:
                return None
            return Account(uid=r["uid"], email=r["email"], password_hash=r["password_hash"])

    def get_student(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT student_id, institute_id, first_name, last_name FROM students WHERE student_id=%s",
                (student_id,),
            )
            r = fetchone(cur)
            return _student(r) if r else None

    def get_trainer(self, trainer_ref: str) -> Optional[Trainer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT trainer_ref, institute_id, first_name, last_name, monthly_salary
                FROM institute_trainers
                WHERE trainer_ref=%s
                """,
                (trainer_ref,),
            )
            r = fetchone(cur)
            return _trainer(r) if r else None

    def get_trainer_student(self, doc_id: str) -> Optional[TrainerStudent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT doc_id, trainer_ref, student_uid, first_name, last_name, fee_amount
                FROM trainer_students
                WHERE doc_id=%s
                """,
                (doc_id,),
            )
            r = fetchone(cur)
            return _trainer_student(r) if r else None

    def get_institute(self, institute_id: str) -> Optional[Institute]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT institute_id, name FROM institutes WHERE institute_id=%s", (institute_id,))
            r = fetchone(cur)
            if not r:
                return None
            return Institute(institute_id=r["institute_id"], name=r["name"])

    def list_students(self, institute_id: str) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, institute_id, first_name, last_name
                FROM students
                WHERE institute_id=%s
                ORDER BY first_name, last_name
                """,
                (institute_id,),
            )
            return [_student(r) for r in fetchall(cur)]

    def list_trainers(self, institute_id: str) -> Sequence[Trainer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT trainer_ref, institute_id, first_name, last_name, monthly_salary
                FROM institute_trainers
                WHERE institute_id=%s
                ORDER BY first_name, last_name
                """,
                (institute_id,),
            )
            return [_trainer(r) for r in fetchall(cur)]

    def list_trainer_students(self, trainer_ref: str) -> Sequence[TrainerStudent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT doc_id, trainer_ref, student_uid, first_name, last_name, fee_amount
                FROM trainer_students
                WHERE trainer_ref=%s
                ORDER BY first_name, last_name
                """,
                (trainer_ref,),
            )
            return [_trainer_student(r) for r in fetchall(cur)]

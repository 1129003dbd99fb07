from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Account, Institute, Student, Trainer, TrainerStudent


class MemberRepository(Protocol):
    """Repository interface for accounts and member profiles.

    Note (DIP): services depend on this interface, never on a concrete store.
    """

    def get_account_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def get_student(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_trainer(self, trainer_ref: str) -> Optional[Trainer]:
        raise NotImplementedError

    def get_trainer_student(self, doc_id: str) -> Optional[TrainerStudent]:
        raise NotImplementedError

    def get_institute(self, institute_id: str) -> Optional[Institute]:
        raise NotImplementedError

    def list_students(self, institute_id: str) -> Sequence[Student]:
        raise NotImplementedError

    def list_trainers(self, institute_id: str) -> Sequence[Trainer]:
        raise NotImplementedError

    def list_trainer_students(self, trainer_ref: str) -> Sequence[TrainerStudent]:
        raise NotImplementedError

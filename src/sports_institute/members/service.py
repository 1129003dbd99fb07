from __future__ import annotations

import logging
from typing import Sequence

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError
from ..database.errors import remote_operation
from .model import Account, Student, Trainer, TrainerStudent
from .repository import MemberRepository
from .roles import DashboardRole, RoleKind

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate an account (login)."""

    def __init__(self, members: MemberRepository):
        self._members = members

    def authenticate(self, email: str, password: str) -> Account:
        email = (email or "").strip().lower()
        if not email or not password:
            raise AuthenticationError("Wrong email or password")

        with remote_operation("sign in", logger):
            account = self._members.get_account_by_email(email)
        if not account:
            raise AuthenticationError("Wrong email or password")

        try:
            ok = check_password_hash(account.password_hash, password)
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Wrong email or password")
        return account


class RoleResolver:
    """Use case: decide which dashboard an identity gets.

    Probe order is fixed: student, trainer, trainer-student, then institute.
    The first profile found wins.
    """

    def __init__(self, members: MemberRepository):
        self._members = members

    def resolve(self, uid: str) -> DashboardRole:
        uid = (uid or "").strip()
        if not uid:
            return DashboardRole(kind=RoleKind.UNKNOWN, uid="")

        with remote_operation("resolve the account role", logger):
            student = self._members.get_student(uid)
            if student:
                return DashboardRole(kind=RoleKind.STUDENT, uid=uid, institute_id=student.institute_id)

            trainer = self._members.get_trainer(uid)
            if trainer:
                return DashboardRole(kind=RoleKind.TRAINER, uid=uid, institute_id=trainer.institute_id)

            if self._members.get_trainer_student(uid):
                return DashboardRole(kind=RoleKind.TRAINER_STUDENT, uid=uid)

            institute = self._members.get_institute(uid)
            if institute:
                return DashboardRole(kind=RoleKind.INSTITUTE, uid=uid, institute_id=institute.institute_id)

        logger.info("No profile found for uid=%s", uid)
        return DashboardRole(kind=RoleKind.UNKNOWN, uid=uid)


class MemberService:
    """Use case: list the people a dashboard works with."""

    def __init__(self, members: MemberRepository):
        self._members = members

    def institute_overview(self, institute_id: str) -> dict:
        institute_id = require_non_empty(institute_id, "Institute")
        with remote_operation("load institute members", logger):
            students = self._members.list_students(institute_id)
            trainers = self._members.list_trainers(institute_id)
        return {"students": list(students), "trainers": list(trainers)}

    def students_of(self, institute_id: str) -> Sequence[Student]:
        with remote_operation("load students", logger):
            return self._members.list_students(institute_id)

    def trainers_of(self, institute_id: str) -> Sequence[Trainer]:
        with remote_operation("load trainers", logger):
            return self._members.list_trainers(institute_id)

    def trainer_students_of(self, trainer_ref: str) -> Sequence[TrainerStudent]:
        with remote_operation("load trainer students", logger):
            return self._members.list_trainer_students(trainer_ref)

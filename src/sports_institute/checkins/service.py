from __future__ import annotations

import logging
from datetime import datetime

from ..common.datetime_utils import month_key, now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import ValidationError
from ..database.errors import remote_operation
from ..members.repository import MemberRepository
from .repository import CheckinRepository

logger = logging.getLogger(__name__)


class CheckinService:
    """Trainer day presence: the source of present days for payroll."""

    def __init__(self, checkins: CheckinRepository, members: MemberRepository):
        self._checkins = checkins
        self._members = members

    def check_in(self, institute_id: str, trainer_ref: str, *, now: datetime | None = None) -> int:
        now = now or now_local()
        today = now.date()

        with remote_operation("check in", logger):
            trainer = self._members.get_trainer(trainer_ref)
            if not trainer or trainer.institute_id != institute_id:
                raise ValidationError("Trainer does not exist")

            if self._checkins.get_for_trainer_and_date(trainer_ref, today):
                raise ValidationError("You have already checked in today")

            checkin_id = self._checkins.create_checkin(
                institute_id=institute_id,
                trainer_ref=trainer_ref,
                work_date=today,
                month=month_key(today),
                check_in_time=now,
            )

        logger.info("Trainer %s checked in at %s", trainer_ref, now.isoformat(timespec="seconds"))
        return checkin_id

    def check_out(self, institute_id: str, trainer_ref: str, *, now: datetime | None = None) -> None:
        now = now or now_local()
        today = now.date()

        with remote_operation("check out", logger):
            record = self._checkins.get_for_trainer_and_date(trainer_ref, today)
            if not record or record.institute_id != institute_id:
                raise ValidationError("You have not checked in today")
            if record.check_out_time is not None:
                raise ValidationError("You have already checked out today")

            if not self._checkins.update_checkout(checkin_id=record.checkin_id, check_out_time=now):
                raise ValidationError("Check-out failed")

        logger.info("Trainer %s checked out at %s", trainer_ref, now.isoformat(timespec="seconds"))

    def count_present(self, institute_id: str, trainer_ref: str, month: str) -> int:
        with remote_operation("count present days", logger):
            return self._checkins.count_present(institute_id=institute_id, trainer_ref=trainer_ref, month=month)

    def get_history_ui(self, trainer_ref: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        with remote_operation("load check-in history", logger):
            rows = self._checkins.get_recent_for_trainer(trainer_ref, limit)
        return [
            {
                "date": r.work_date.strftime("%Y-%m-%d"),
                "check_in": r.check_in_time.strftime("%H:%M:%S"),
                "check_out": r.check_out_time.strftime("%H:%M:%S") if r.check_out_time else "-",
                "status": r.status.value,
            }
            for r in rows
        ]

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import TrainerCheckin


class CheckinRepository(Protocol):
    def get_for_trainer_and_date(self, trainer_ref: str, work_date: date) -> Optional[TrainerCheckin]:
        raise NotImplementedError

    def get_recent_for_trainer(self, trainer_ref: str, limit: int) -> Sequence[TrainerCheckin]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        institute_id: str,
        trainer_ref: str,
        work_date: date,
        month: str,
        check_in_time: datetime,
    ) -> int:
        raise NotImplementedError

    def update_checkout(self, *, checkin_id: int, check_out_time: datetime) -> bool:
        raise NotImplementedError

    def count_present(self, *, institute_id: str, trainer_ref: str, month: str) -> int:
        raise NotImplementedError

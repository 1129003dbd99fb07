from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import SlotTime, Weekday
from .model import ScheduleSlot


class ScheduleRepository(Protocol):
    def list_for_institute(self, *, institute_id: str) -> Sequence[ScheduleSlot]:
        raise NotImplementedError

    def list_for_trainer(self, *, institute_id: str, trainer_ref: str) -> Sequence[ScheduleSlot]:
        raise NotImplementedError

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
        """Create or overwrite the slot at (day, time).

        Returns slot_id.
        """

        raise NotImplementedError

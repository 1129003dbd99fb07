from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import SlotTime, Weekday


@dataclass(frozen=True)
class ScheduleSlot:
    """Domain entity: one (day, time) cell of an institute's weekly timetable."""

    slot_id: int
    institute_id: str
    day: Weekday
    time: SlotTime
    category: str
    trainer_ref: str
    trainer_name: str
    student_refs: tuple[str, ...]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def has_student(self, student_ref: str) -> bool:
        return student_ref in self.student_refs


@dataclass(frozen=True)
class SlotInput:
    """What an institute submits when adding or editing a class."""

    day: str
    time: str
    category: str
    trainer_ref: str
    student_refs: tuple[str, ...] = ()

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import weekday_code
from ..common.validators import require_choice, require_non_empty
from ..core.enums import SlotTime, Weekday
from ..core.exceptions import ValidationError
from ..database.errors import remote_operation
from ..members.repository import MemberRepository
from .model import ScheduleSlot, SlotInput
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


def find_slot(slots: Sequence[ScheduleSlot], day: Weekday, time: SlotTime) -> Optional[ScheduleSlot]:
    """Linear scan; an owner has at most 7 x 9 slots."""
    for slot in slots:
        if slot.day == day and slot.time == time:
            return slot
    return None


def weekly_grid(slots: Sequence[ScheduleSlot]) -> list[dict]:
    """Rows per start time, one cell per weekday (slot or None)."""
    return [
        {"time": time.value, "cells": {day.value: find_slot(slots, day, time) for day in Weekday}}
        for time in SlotTime
    ]


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository, members: MemberRepository):
        self._schedules = schedules
        self._members = members

    def list_for_institute(self, institute_id: str) -> Sequence[ScheduleSlot]:
        with remote_operation("load the timetable", logger):
            return self._schedules.list_for_institute(institute_id=institute_id)

    def get_slot(self, institute_id: str, day, time) -> Optional[ScheduleSlot]:
        day = require_choice(day, Weekday, "Day")
        time = require_choice(time, SlotTime, "Time")
        return find_slot(self.list_for_institute(institute_id), day, time)

    def upsert_slot(self, institute_id: str, slot: SlotInput) -> int:
        """Add a class or overwrite the one already at (day, time).

        Category, trainer and at least one student are required; nothing is
        written when any of them is missing.
        """

        day = require_choice(slot.day, Weekday, "Day")
        time = require_choice(slot.time, SlotTime, "Time")
        category = require_non_empty(slot.category, "Category")
        trainer_ref = require_non_empty(slot.trainer_ref, "Trainer")

        if isinstance(slot.student_refs, str) or not all(isinstance(s, str) for s in slot.student_refs):
            raise ValidationError("Students must be a list of student ids")
        student_refs = tuple(dict.fromkeys(s.strip() for s in slot.student_refs if s.strip()))
        if not student_refs:
            raise ValidationError("Select at least one student")

        with remote_operation("save the class", logger):
            trainer = self._members.get_trainer(trainer_ref)
            if not trainer or trainer.institute_id != institute_id:
                raise ValidationError("Trainer does not belong to this institute")

            enrolled = {s.student_id for s in self._members.list_students(institute_id)}
            unknown = [ref for ref in student_refs if ref not in enrolled]
            if unknown:
                raise ValidationError(f"Unknown students: {', '.join(unknown)}")

            slot_id = self._schedules.upsert(
                institute_id=institute_id,
                day=day,
                time=time,
                category=category,
                trainer_ref=trainer.trainer_ref,
                trainer_name=trainer.first_name,
                student_refs=student_refs,
            )

        logger.info("Saved class %s %s %s (slot_id=%s)", institute_id, day.value, time.value, slot_id)
        return slot_id

    def list_for_trainer(self, institute_id: str, trainer_ref: str) -> Sequence[ScheduleSlot]:
        with remote_operation("load the trainer timetable", logger):
            return self._schedules.list_for_trainer(institute_id=institute_id, trainer_ref=trainer_ref)

    def list_for_student(self, institute_id: str, student_ref: str) -> Sequence[ScheduleSlot]:
        return [s for s in self.list_for_institute(institute_id) if s.has_student(student_ref)]

    def classes_on(self, institute_id: str, trainer_ref: str, on_date: date) -> Sequence[ScheduleSlot]:
        """The trainer's classes that fall on the weekday of `on_date`."""
        day = weekday_code(on_date)
        return [s for s in self.list_for_trainer(institute_id, trainer_ref) if s.day == day]

    def get_trainer_slot(self, institute_id: str, trainer_ref: str, slot_id: int) -> ScheduleSlot:
        for slot in self.list_for_trainer(institute_id, trainer_ref):
            if slot.slot_id == int(slot_id):
                return slot
        raise ValidationError("Class not found")

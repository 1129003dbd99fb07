from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import now_local, weekday_code
from ..common.validators import require_choice
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendancePolicy, AttendanceStatus
from ..core.exceptions import FutureDateError, ValidationError
from ..database.errors import remote_operation
from ..members.repository import MemberRepository
from ..schedules.model import ScheduleSlot
from .model import AttendanceRecord, AttendanceSummary, NewAttendance, SaveResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Class attendance taken by trainers, and the summaries shown next to it."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberRepository,
        *,
        policy: AttendancePolicy = AttendancePolicy.UPSERT,
    ):
        self._attendance = attendance
        self._members = members
        self._policy = AttendancePolicy(policy)

    @property
    def policy(self) -> AttendancePolicy:
        return self._policy

    def record_attendance(
        self,
        institute_id: str,
        slot: ScheduleSlot,
        record_date: date,
        statuses: Mapping[str, object],
        *,
        today: Optional[date] = None,
    ) -> SaveResult:
        """Save one status per student on the class roster.

        Students without an explicit status are saved as Absent. The whole
        roster is written in a single batch, so a store failure saves nothing.
        """

        today = today or now_local().date()
        if record_date > today:
            raise FutureDateError("You cannot mark attendance for a future date")

        if slot.institute_id != institute_id:
            raise ValidationError("Class does not belong to this institute")
        if weekday_code(record_date) != slot.day:
            raise ValidationError(f"This class is not held on {record_date.strftime('%A')}s")
        if not slot.student_refs:
            raise ValidationError("This class has no students")

        if not isinstance(statuses, Mapping):
            raise ValidationError("Statuses must map each student to Present or Absent")
        parsed = {ref: require_choice(value, AttendanceStatus, "Status") for ref, value in statuses.items()}

        with remote_operation("save attendance", logger):
            names = {s.student_id: s.first_name for s in self._members.list_students(institute_id)}

            batch = [
                NewAttendance(
                    institute_id=institute_id,
                    record_date=record_date,
                    day=slot.day,
                    time=slot.time,
                    category=slot.category,
                    trainer_ref=slot.trainer_ref,
                    student_ref=ref,
                    student_name=names.get(ref, ""),
                    status=parsed.get(ref, AttendanceStatus.ABSENT),
                )
                for ref in slot.student_refs
            ]
            saved = self._attendance.save_batch(batch, replace_existing=self._policy == AttendancePolicy.UPSERT)

        present = sum(1 for rec in batch if rec.status == AttendanceStatus.PRESENT)
        logger.info(
            "Attendance saved: institute=%s class=%s date=%s records=%s policy=%s",
            institute_id,
            slot.category,
            record_date.isoformat(),
            saved,
            self._policy.value,
        )
        return SaveResult(
            record_date=record_date,
            category=slot.category,
            saved=saved,
            present=present,
            absent=len(batch) - present,
        )

    def _class_records(
        self,
        institute_id: str,
        trainer_ref: str,
        category: str,
        record_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        with remote_operation("load attendance", logger):
            return self._attendance.list_for_class(
                institute_id=institute_id,
                trainer_ref=trainer_ref,
                category=category,
                record_date=record_date,
            )

    def summarize(self, institute_id: str, student_ref: str, trainer_ref: str, category: str) -> AttendanceSummary:
        records = self._class_records(institute_id, trainer_ref, category)
        return AttendanceSummary.from_statuses(r.status for r in records if r.student_ref == student_ref)

    def summarize_roster(
        self,
        institute_id: str,
        trainer_ref: str,
        category: str,
        student_refs: Sequence[str],
    ) -> dict[str, AttendanceSummary]:
        """One query for the class, grouped per student."""
        grouped: dict[str, list[AttendanceStatus]] = defaultdict(list)
        for r in self._class_records(institute_id, trainer_ref, category):
            grouped[r.student_ref].append(r.status)
        return {ref: AttendanceSummary.from_statuses(grouped.get(ref, [])) for ref in student_refs}

    def statuses_for_date(
        self,
        institute_id: str,
        trainer_ref: str,
        category: str,
        record_date: date,
    ) -> dict[str, AttendanceStatus]:
        """Prefill for the attendance form; with appended duplicates the latest save wins."""
        out: dict[str, AttendanceStatus] = {}
        for r in self._class_records(institute_id, trainer_ref, category, record_date):
            out[r.student_ref] = r.status
        return out

    def history_for_student(
        self,
        student_ref: str,
        *,
        institute_id: Optional[str] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> Sequence[AttendanceRecord]:
        with remote_operation("load attendance history", logger):
            return self._attendance.list_for_student(student_ref=student_ref, institute_id=institute_id, limit=limit)

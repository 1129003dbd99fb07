from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, NewAttendance


class AttendanceRepository(Protocol):
    def save_batch(self, records: Sequence[NewAttendance], *, replace_existing: bool) -> int:
        """Write all records in one transaction.

        With replace_existing, rows for the same (student, date, category)
        are removed first. Returns the number of rows inserted.
        """

        raise NotImplementedError

    def list_for_class(
        self,
        *,
        institute_id: str,
        trainer_ref: str,
        category: str,
        record_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student(
        self,
        *,
        student_ref: str,
        institute_id: Optional[str] = None,
        limit: int = 100,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

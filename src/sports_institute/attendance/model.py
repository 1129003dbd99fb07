from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional

from ..common.numbers import round_half_up
from ..core.enums import AttendanceStatus, SlotTime, Weekday


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's status for one class on one date."""

    record_id: int
    institute_id: str
    record_date: date
    day: Weekday
    time: SlotTime
    category: str
    trainer_ref: str
    student_ref: str
    student_name: str
    status: AttendanceStatus
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewAttendance:
    """Write-model for one row of an attendance batch."""

    institute_id: str
    record_date: date
    day: Weekday
    time: SlotTime
    category: str
    trainer_ref: str
    student_ref: str
    student_name: str
    status: AttendanceStatus


@dataclass(frozen=True)
class AttendanceSummary:
    present_count: int
    absent_count: int
    total_count: int
    present_percent: int

    @classmethod
    def from_statuses(cls, statuses: Iterable[AttendanceStatus]) -> "AttendanceSummary":
        statuses = list(statuses)
        total = len(statuses)
        absent = sum(1 for s in statuses if s == AttendanceStatus.ABSENT)
        present = total - absent
        percent = 0 if total == 0 else round_half_up(Decimal(100 * present) / Decimal(total))
        return cls(present_count=present, absent_count=absent, total_count=total, present_percent=percent)


@dataclass(frozen=True)
class SaveResult:
    record_date: date
    category: str
    saved: int
    present: int
    absent: int

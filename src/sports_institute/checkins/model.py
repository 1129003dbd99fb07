from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class TrainerCheckin:
    """Domain entity: a trainer's presence for one working day."""

    checkin_id: int
    institute_id: str
    trainer_ref: str
    work_date: date
    month: str
    check_in_time: datetime
    check_out_time: Optional[datetime]
    status: AttendanceStatus = AttendanceStatus.PRESENT

from __future__ import annotations

from typing import Optional

from ..attendance.model import AttendanceRecord, AttendanceSummary, SaveResult
from ..billing.model import FeeRecord, SalaryRecord
from ..billing.salary_service import SalaryBoardRow
from ..members.model import Student, Trainer, TrainerStudent
from ..schedules.model import ScheduleSlot


def _ts(value) -> Optional[str]:
    return value.isoformat(timespec="seconds") if value else None


def slot_to_dict(slot: Optional[ScheduleSlot]) -> Optional[dict]:
    if slot is None:
        return None
    return {
        "slot_id": slot.slot_id,
        "day": slot.day.value,
        "time": slot.time.value,
        "category": slot.category,
        "trainer_ref": slot.trainer_ref,
        "trainer_name": slot.trainer_name,
        "student_refs": list(slot.student_refs),
    }


def grid_to_list(grid: list[dict]) -> list[dict]:
    return [
        {"time": row["time"], "cells": {day: slot_to_dict(slot) for day, slot in row["cells"].items()}}
        for row in grid
    ]


def summary_to_dict(summary: AttendanceSummary) -> dict:
    return {
        "present": summary.present_count,
        "absent": summary.absent_count,
        "total": summary.total_count,
        "present_percent": summary.present_percent,
    }


def attendance_to_dict(record: AttendanceRecord) -> dict:
    return {
        "date": record.record_date.isoformat(),
        "day": record.day.value,
        "time": record.time.value,
        "category": record.category,
        "trainer_ref": record.trainer_ref,
        "student_ref": record.student_ref,
        "student_name": record.student_name,
        "status": record.status.value,
    }


def save_result_to_dict(result: SaveResult) -> dict:
    return {
        "date": result.record_date.isoformat(),
        "category": result.category,
        "saved": result.saved,
        "present": result.present,
        "absent": result.absent,
    }


def fee_to_dict(fee: FeeRecord) -> dict:
    return {
        "fee_id": fee.fee_id,
        "student_ref": fee.student_ref,
        "student_name": fee.student_name,
        "month": fee.month,
        "year": fee.year,
        "base_fee": str(fee.base_fee),
        "discount": str(fee.discount),
        "extra_charges": str(fee.extra_charges),
        "final_amount": str(fee.final_amount),
        "payment_mode": fee.payment_mode.value,
        "receipt_no": fee.receipt_no,
        "status": fee.status.value,
        "remarks": fee.remarks,
        "created_at": _ts(fee.created_at),
        "paid_at": _ts(fee.paid_at),
    }


def salary_to_dict(salary: SalaryRecord) -> dict:
    return {
        "salary_key": salary.salary_key,
        "trainer_ref": salary.trainer_ref,
        "trainer_name": salary.trainer_name,
        "month": salary.month,
        "total_days": salary.total_days,
        "present_days": salary.present_days,
        "absent_days": salary.absent_days,
        "monthly_salary": str(salary.monthly_salary),
        "per_day_salary": str(salary.per_day_salary),
        "payable_salary": salary.payable_salary,
        "status": salary.status.value,
        "generated_at": _ts(salary.generated_at),
        "paid_at": _ts(salary.paid_at),
        "payment_mode": salary.payment_mode.value if salary.payment_mode else None,
    }


def board_row_to_dict(row: SalaryBoardRow) -> dict:
    return {
        "trainer_ref": row.trainer_ref,
        "trainer_name": row.trainer_name,
        "status": row.status.value,
        "salary": salary_to_dict(row.record) if row.record else None,
    }


def student_to_dict(student: Student) -> dict:
    return {"student_id": student.student_id, "name": student.full_name}


def trainer_to_dict(trainer: Trainer) -> dict:
    return {
        "trainer_ref": trainer.trainer_ref,
        "name": trainer.full_name,
        "monthly_salary": str(trainer.monthly_salary),
    }


def trainer_student_to_dict(student: TrainerStudent) -> dict:
    return {
        "doc_id": student.doc_id,
        "student_uid": student.student_uid,
        "name": student.full_name,
        "fee_amount": str(student.fee_amount),
    }

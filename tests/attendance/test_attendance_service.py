from datetime import date

import mysql.connector
import pytest

from fakes import InMemoryAttendance, demo_members
from sports_institute.attendance.model import AttendanceSummary
from sports_institute.attendance.service import AttendanceService
from sports_institute.core.enums import AttendancePolicy, AttendanceStatus, SlotTime, Weekday
from sports_institute.core.exceptions import FutureDateError, RemoteOperationError, ValidationError
from sports_institute.schedules.model import ScheduleSlot

TODAY = date(2026, 10, 19)


def _slot(student_refs=("st-1", "st-2", "st-3")) -> ScheduleSlot:
    return ScheduleSlot(
        slot_id=1,
        institute_id="inst-1",
        day=Weekday.MON,
        time=SlotTime.T0900,
        category="Football",
        trainer_ref="tr-1",
        trainer_name="Ravi",
        student_refs=tuple(student_refs),
    )


def _service(policy=AttendancePolicy.UPSERT):
    repo = InMemoryAttendance()
    return AttendanceService(repo, demo_members(), policy=policy), repo


def test_future_date_is_rejected_before_anything_is_written():
    svc, repo = _service()

    with pytest.raises(FutureDateError):
        svc.record_attendance("inst-1", _slot(), date(2026, 10, 20), {"st-1": "Present"}, today=TODAY)

    assert repo.batches == 0
    assert repo.records == []


def test_today_is_allowed_and_unmarked_students_default_to_absent():
    svc, repo = _service()

    result = svc.record_attendance("inst-1", _slot(), TODAY, {"st-1": "Present"}, today=TODAY)

    assert result.saved == 3
    assert result.present == 1
    assert result.absent == 2
    statuses = {r.student_ref: r.status for r in repo.records}
    assert statuses == {
        "st-1": AttendanceStatus.PRESENT,
        "st-2": AttendanceStatus.ABSENT,
        "st-3": AttendanceStatus.ABSENT,
    }
    assert {r.student_name for r in repo.records} == {"Asha", "Dev", "Nila"}
    assert repo.batches == 1


def test_statuses_for_students_off_the_roster_are_ignored():
    svc, repo = _service()

    svc.record_attendance("inst-1", _slot(("st-1",)), TODAY, {"st-1": "Present", "st-9": "Present"}, today=TODAY)

    assert [r.student_ref for r in repo.records] == ["st-1"]


def test_date_on_another_weekday_than_the_class_is_rejected():
    svc, repo = _service()

    # the class runs on Mondays; 2026-10-13 is a Tuesday
    with pytest.raises(ValidationError):
        svc.record_attendance("inst-1", _slot(), date(2026, 10, 13), {"st-1": "Present"}, today=TODAY)
    assert repo.batches == 0


@pytest.mark.parametrize("statuses", [["st-1"], "Present", 3])
def test_statuses_must_be_a_mapping(statuses):
    svc, repo = _service()

    with pytest.raises(ValidationError):
        svc.record_attendance("inst-1", _slot(), TODAY, statuses, today=TODAY)
    assert repo.batches == 0


def test_invalid_status_value_is_rejected():
    svc, repo = _service()

    with pytest.raises(ValidationError):
        svc.record_attendance("inst-1", _slot(), TODAY, {"st-1": "Late"}, today=TODAY)
    assert repo.batches == 0


def test_empty_roster_and_foreign_class_are_rejected():
    svc, _ = _service()

    with pytest.raises(ValidationError):
        svc.record_attendance("inst-1", _slot(()), TODAY, {}, today=TODAY)
    with pytest.raises(ValidationError):
        svc.record_attendance("inst-2", _slot(), TODAY, {}, today=TODAY)


def test_upsert_policy_keeps_one_record_per_student_date_and_class():
    svc, repo = _service(AttendancePolicy.UPSERT)

    svc.record_attendance("inst-1", _slot(), TODAY, {"st-1": "Absent"}, today=TODAY)
    svc.record_attendance("inst-1", _slot(), TODAY, {"st-1": "Present"}, today=TODAY)

    assert len(repo.records) == 3
    assert svc.statuses_for_date("inst-1", "tr-1", "Football", TODAY)["st-1"] == AttendanceStatus.PRESENT
    assert svc.summarize("inst-1", "st-1", "tr-1", "Football").total_count == 1


def test_append_policy_keeps_every_save():
    svc, repo = _service(AttendancePolicy.APPEND)

    svc.record_attendance("inst-1", _slot(), TODAY, {"st-1": "Absent"}, today=TODAY)
    svc.record_attendance("inst-1", _slot(), TODAY, {"st-1": "Present"}, today=TODAY)

    assert len(repo.records) == 6
    summary = svc.summarize("inst-1", "st-1", "tr-1", "Football")
    assert summary.total_count == 2
    assert summary.present_count == 1
    # the latest save wins in the form prefill
    assert svc.statuses_for_date("inst-1", "tr-1", "Football", TODAY)["st-1"] == AttendanceStatus.PRESENT


def test_store_failure_surfaces_as_remote_operation_error():
    svc, repo = _service()
    repo.fail_with = mysql.connector.errors.OperationalError("Lost connection to MySQL server")

    with pytest.raises(RemoteOperationError):
        svc.record_attendance("inst-1", _slot(), TODAY, {"st-1": "Present"}, today=TODAY)
    assert repo.records == []


def test_summarize_counts_only_the_given_class():
    svc, _ = _service()
    svc.record_attendance("inst-1", _slot(), date(2026, 10, 12), {"st-1": "Present"}, today=TODAY)
    svc.record_attendance("inst-1", _slot(), date(2026, 10, 19), {"st-1": "Present"}, today=TODAY)
    svc.record_attendance("inst-1", _slot(), date(2026, 10, 5), {}, today=TODAY)

    summary = svc.summarize("inst-1", "st-1", "tr-1", "Football")
    assert (summary.present_count, summary.absent_count, summary.total_count) == (2, 1, 3)
    assert summary.present_percent == 67

    assert svc.summarize("inst-1", "st-1", "tr-1", "Tennis").total_count == 0


def test_summarize_roster_includes_students_without_records():
    svc, _ = _service()
    svc.record_attendance("inst-1", _slot(("st-1", "st-2")), TODAY, {"st-1": "Present"}, today=TODAY)

    summaries = svc.summarize_roster("inst-1", "tr-1", "Football", ["st-1", "st-2", "st-3"])

    assert summaries["st-1"].present_percent == 100
    assert summaries["st-2"].present_percent == 0
    assert summaries["st-3"] == AttendanceSummary(present_count=0, absent_count=0, total_count=0, present_percent=0)


def test_history_for_student_is_newest_first():
    svc, _ = _service()
    svc.record_attendance("inst-1", _slot(), date(2026, 10, 5), {"st-2": "Present"}, today=TODAY)
    svc.record_attendance("inst-1", _slot(), date(2026, 10, 12), {}, today=TODAY)

    history = svc.history_for_student("st-2", institute_id="inst-1")
    assert [r.record_date for r in history] == [date(2026, 10, 12), date(2026, 10, 5)]


@pytest.mark.parametrize(
    "statuses, expected",
    [
        ([], 0),
        ([AttendanceStatus.PRESENT] * 4, 100),
        ([AttendanceStatus.ABSENT] * 4, 0),
        ([AttendanceStatus.PRESENT, AttendanceStatus.ABSENT], 50),
        ([AttendanceStatus.PRESENT] + [AttendanceStatus.ABSENT] * 2, 33),
        ([AttendanceStatus.PRESENT] * 2 + [AttendanceStatus.ABSENT], 67),
        # 1/8 = 12.5% rounds half up
        ([AttendanceStatus.PRESENT] + [AttendanceStatus.ABSENT] * 7, 13),
    ],
)
def test_present_percent(statuses, expected):
    summary = AttendanceSummary.from_statuses(statuses)
    assert summary.present_percent == expected
    assert summary.present_count + summary.absent_count == summary.total_count

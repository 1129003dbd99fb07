from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_request_date
from ..container import Container
from ..dashboard.serializers import attendance_to_dict, save_result_to_dict, slot_to_dict, summary_to_dict
from ..dashboard.session import action_required, current_role
from ..members.roles import Action, RoleKind


def register(app: Flask, container: Container) -> None:
    def _selected_date():
        return parse_request_date(request.args.get("date"), default=now_local().date())

    @app.route("/api/trainer/classes", methods=["GET"], endpoint="trainer_classes")
    @action_required(Action.TAKE_ATTENDANCE)
    def trainer_classes():
        role = current_role()
        on_date = _selected_date()
        slots = container.schedule_service.classes_on(role.institute_id or "", role.uid, on_date)
        return jsonify({"date": on_date.isoformat(), "classes": [slot_to_dict(s) for s in slots]})

    @app.route("/api/trainer/classes/<int:slot_id>/attendance", methods=["GET"], endpoint="class_roster")
    @action_required(Action.TAKE_ATTENDANCE)
    def class_roster(slot_id: int):
        role = current_role()
        institute_id = role.institute_id or ""
        on_date = _selected_date()
        slot = container.schedule_service.get_trainer_slot(institute_id, role.uid, slot_id)

        names = {s.student_id: s.full_name for s in container.member_service.students_of(institute_id)}
        summaries = container.attendance_service.summarize_roster(
            institute_id, role.uid, slot.category, slot.student_refs
        )
        marked = container.attendance_service.statuses_for_date(institute_id, role.uid, slot.category, on_date)

        roster = [
            {
                "student_ref": ref,
                "name": names.get(ref, ""),
                "status": marked[ref].value if ref in marked else None,
                "summary": summary_to_dict(summaries[ref]),
            }
            for ref in slot.student_refs
        ]
        return jsonify({"date": on_date.isoformat(), "class": slot_to_dict(slot), "roster": roster})

    @app.route("/api/trainer/classes/<int:slot_id>/attendance", methods=["POST"], endpoint="save_attendance")
    @action_required(Action.TAKE_ATTENDANCE)
    def save_attendance(slot_id: int):
        role = current_role()
        institute_id = role.institute_id or ""
        payload = request.get_json(silent=True) or {}

        record_date = parse_request_date(payload.get("date"), default=now_local().date())
        slot = container.schedule_service.get_trainer_slot(institute_id, role.uid, slot_id)
        result = container.attendance_service.record_attendance(
            institute_id, slot, record_date, payload.get("statuses") or {}
        )
        return jsonify({"success": True, "message": "Attendance saved", "result": save_result_to_dict(result)})

    @app.route("/api/my/attendance", methods=["GET"], endpoint="my_attendance")
    @action_required(Action.VIEW_MY_ATTENDANCE)
    def my_attendance():
        role = current_role()
        if role.kind == RoleKind.TRAINER:
            return jsonify({"checkins": container.checkin_service.get_history_ui(role.uid)})

        records = container.attendance_service.history_for_student(role.uid, institute_id=role.institute_id)
        return jsonify({"records": [attendance_to_dict(r) for r in records]})

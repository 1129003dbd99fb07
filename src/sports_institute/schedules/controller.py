from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError
from ..dashboard.serializers import grid_to_list, slot_to_dict
from ..dashboard.session import action_required, current_role
from ..members.roles import Action, RoleKind
from .model import SlotInput
from .service import weekly_grid


def _student_refs(value) -> tuple:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ValidationError("Students must be a list of student ids")
    return tuple(value)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/institute/timetable", methods=["GET", "POST"], endpoint="institute_timetable")
    @action_required(Action.MANAGE_TIMETABLE)
    def institute_timetable():
        institute_id = current_role().institute_id or ""

        if request.method == "POST":
            payload = request.get_json(silent=True) or {}
            slot_id = container.schedule_service.upsert_slot(
                institute_id,
                SlotInput(
                    day=payload.get("day", ""),
                    time=payload.get("time", ""),
                    category=payload.get("category", ""),
                    trainer_ref=payload.get("trainer_ref", ""),
                    student_refs=_student_refs(payload.get("student_refs")),
                ),
            )
            return jsonify({"success": True, "slot_id": slot_id, "message": "Class saved"})

        slots = container.schedule_service.list_for_institute(institute_id)
        return jsonify({"slots": [slot_to_dict(s) for s in slots], "grid": grid_to_list(weekly_grid(slots))})

    @app.route("/api/institute/timetable/slot", methods=["GET"], endpoint="institute_timetable_slot")
    @action_required(Action.MANAGE_TIMETABLE)
    def institute_timetable_slot():
        slot = container.schedule_service.get_slot(
            current_role().institute_id or "",
            request.args.get("day", ""),
            request.args.get("time", ""),
        )
        return jsonify({"slot": slot_to_dict(slot)})

    @app.route("/api/timetable", methods=["GET"], endpoint="my_timetable")
    @action_required(Action.VIEW_TIMETABLE)
    def my_timetable():
        role = current_role()
        institute_id = role.institute_id or ""
        if role.kind == RoleKind.TRAINER:
            slots = container.schedule_service.list_for_trainer(institute_id, role.uid)
        else:
            slots = container.schedule_service.list_for_student(institute_id, role.uid)
        return jsonify({"slots": [slot_to_dict(s) for s in slots], "grid": grid_to_list(weekly_grid(slots))})

from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from ..dashboard.serializers import student_to_dict, trainer_to_dict
from ..dashboard.session import action_required, current_role
from .roles import Action


def register(app: Flask, container: Container) -> None:
    @app.route("/api/institute/members", methods=["GET"], endpoint="institute_members")
    @action_required(Action.VIEW_MEMBERS)
    def institute_members():
        overview = container.member_service.institute_overview(current_role().institute_id or "")
        return jsonify(
            {
                "students": [student_to_dict(s) for s in overview["students"]],
                "trainers": [trainer_to_dict(t) for t in overview["trainers"]],
            }
        )

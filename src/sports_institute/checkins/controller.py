from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from ..dashboard.session import action_required, current_role
from ..members.roles import Action


def register(app: Flask, container: Container) -> None:
    @app.route("/api/trainer/checkin", methods=["POST"], endpoint="trainer_checkin")
    @action_required(Action.CHECKIN_CHECKOUT)
    def trainer_checkin():
        role = current_role()
        container.checkin_service.check_in(role.institute_id or "", role.uid)
        return jsonify({"success": True, "message": "Checked in"})

    @app.route("/api/trainer/checkout", methods=["POST"], endpoint="trainer_checkout")
    @action_required(Action.CHECKIN_CHECKOUT)
    def trainer_checkout():
        role = current_role()
        container.checkin_service.check_out(role.institute_id or "", role.uid)
        return jsonify({"success": True, "message": "Checked out"})

    @app.route("/api/trainer/checkins", methods=["GET"], endpoint="trainer_checkins")
    @action_required(Action.CHECKIN_CHECKOUT)
    def trainer_checkins():
        return jsonify({"checkins": container.checkin_service.get_history_ui(current_role().uid)})

from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import month_key, now_local
from ..container import Container
from ..core.enums import PaymentMode
from ..dashboard.serializers import board_row_to_dict, fee_to_dict, salary_to_dict, trainer_student_to_dict
from ..dashboard.session import action_required, current_role
from ..members.roles import Action


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    # Trainer fees

    @app.route("/api/trainer/students", methods=["GET"], endpoint="trainer_students")
    @action_required(Action.MANAGE_FEES)
    def trainer_students():
        students = container.member_service.trainer_students_of(current_role().uid)
        return jsonify({"students": [trainer_student_to_dict(s) for s in students]})

    @app.route("/api/trainer/students/<student_ref>/fees", methods=["GET", "POST"], endpoint="trainer_student_fees")
    @action_required(Action.MANAGE_FEES)
    def trainer_student_fees(student_ref: str):
        trainer_ref = current_role().uid

        if request.method == "POST":
            payload = _payload()
            today = now_local()
            fee = container.fee_service.generate_fee(
                trainer_ref,
                student_ref,
                month=payload.get("month", today.month),
                year=payload.get("year", today.year),
                base_fee=payload.get("base_fee"),
                discount=payload.get("discount", 0),
                extra_charges=payload.get("extra_charges", 0),
                payment_mode=payload.get("payment_mode", PaymentMode.CASH.value),
                remarks=payload.get("remarks", ""),
            )
            return jsonify({"success": True, "message": "Fee generated", "fee": fee_to_dict(fee)}), 201

        fees = container.fee_service.fee_history(trainer_ref, student_ref)
        return jsonify({"fees": [fee_to_dict(f) for f in fees]})

    @app.route(
        "/api/trainer/students/<student_ref>/fees/<int:fee_id>/paid",
        methods=["POST"],
        endpoint="trainer_fee_paid",
    )
    @action_required(Action.MANAGE_FEES)
    def trainer_fee_paid(student_ref: str, fee_id: int):
        container.fee_service.mark_paid(current_role().uid, student_ref, fee_id)
        return jsonify({"success": True, "message": "Fee marked as paid"})

    @app.route(
        "/api/trainer/students/<student_ref>/fees/<int:fee_id>",
        methods=["DELETE"],
        endpoint="trainer_fee_delete",
    )
    @action_required(Action.MANAGE_FEES)
    def trainer_fee_delete(student_ref: str, fee_id: int):
        container.fee_service.delete_fee(current_role().uid, student_ref, fee_id)
        return jsonify({"success": True, "message": "Fee deleted"})

    @app.route("/api/my/fees", methods=["GET"], endpoint="my_fees")
    @action_required(Action.VIEW_MY_FEES)
    def my_fees():
        fees = container.fee_service.fees_for_member(current_role().uid)
        return jsonify({"fees": [fee_to_dict(f) for f in fees]})

    # Institute salaries

    @app.route("/api/institute/salaries", methods=["GET"], endpoint="salary_board")
    @action_required(Action.MANAGE_SALARIES)
    def salary_board():
        month = request.args.get("month") or month_key(now_local().date())
        rows = container.salary_service.salary_board(
            current_role().institute_id or "", month, request.args.get("status", "all")
        )
        return jsonify({"month": month, "rows": [board_row_to_dict(r) for r in rows]})

    @app.route("/api/institute/salaries/<trainer_ref>/generate", methods=["POST"], endpoint="generate_salary")
    @action_required(Action.MANAGE_SALARIES)
    def generate_salary(trainer_ref: str):
        month = _payload().get("month") or month_key(now_local().date())
        record = container.salary_service.generate_salary(current_role().institute_id or "", trainer_ref, month)
        return jsonify({"success": True, "message": "Salary generated", "salary": salary_to_dict(record)})

    @app.route("/api/institute/salaries/<salary_key>/paid", methods=["POST"], endpoint="salary_paid")
    @action_required(Action.MANAGE_SALARIES)
    def salary_paid(salary_key: str):
        container.salary_service.mark_salary_paid(
            current_role().institute_id or "",
            salary_key,
            payment_mode=_payload().get("payment_mode", PaymentMode.CASH.value),
        )
        return jsonify({"success": True, "message": "Salary marked as paid"})

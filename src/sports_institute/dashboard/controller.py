from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.constants import LANDING_ROUTE
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicatePeriodError,
    FutureDateError,
    RemoteOperationError,
    ValidationError,
)
from .session import current_role, install_idle_logout, login_required, sign_in, sign_out

ERROR_STATUS = {
    ValidationError: 400,
    FutureDateError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    DuplicatePeriodError: 409,
    RemoteOperationError: 502,
}


def status_for(error: DomainError) -> int:
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 400


def register(app: Flask, container: Container) -> None:
    install_idle_logout(app, minutes=int(app.config["IDLE_LOGOUT_MINUTES"]))

    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        status = status_for(error)
        if status >= 500:
            app.logger.warning("Request %s %s failed: %s", request.method, request.path, error)
        return jsonify({"success": False, "error": type(error).__name__, "message": str(error)}), status

    @app.route(LANDING_ROUTE, methods=["GET"], endpoint="landing")
    def landing():
        role = current_role()
        return jsonify({"signed_in": bool(role.uid), "role": role.kind.value})

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True) or request.form
        account = container.auth_service.authenticate(payload.get("email", ""), payload.get("password", ""))
        role = container.role_resolver.resolve(account.uid)
        sign_in(role)
        app.logger.info("Signed in uid=%s as %s", account.uid, role.kind.value)
        return jsonify({"success": True, "role": role.kind.value, "actions": sorted(a.value for a in role.actions)})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        sign_out()
        return jsonify({"success": True, "redirect": LANDING_ROUTE})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        role = current_role()
        return jsonify(
            {
                "uid": role.uid,
                "role": role.kind.value,
                "institute_id": role.institute_id,
                "actions": sorted(a.value for a in role.actions),
            }
        )

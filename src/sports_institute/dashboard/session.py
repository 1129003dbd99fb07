"""Session helpers shared by every controller.

The signed-in identity lives in the Flask session as the dict produced by
``DashboardRole.to_session()``. A per-request deadline replaces the browser
idle timer: any request pushes it forward, and a request that arrives after
it has passed clears the session.
"""

from __future__ import annotations

import time
from datetime import timedelta
from functools import wraps
from typing import Callable

from flask import Flask, current_app, jsonify, session

from ..core.constants import LANDING_ROUTE
from ..members.roles import Action, DashboardRole, RoleKind

IDENTITY_KEY = "identity"
LAST_SEEN_KEY = "last_seen"


def sign_in(role: DashboardRole, *, clock: Callable[[], float] = time.time) -> None:
    session.clear()
    session[IDENTITY_KEY] = role.to_session()
    session[LAST_SEEN_KEY] = clock()


def sign_out() -> None:
    session.clear()


def current_role() -> DashboardRole:
    data = session.get(IDENTITY_KEY)
    if not data:
        return DashboardRole(kind=RoleKind.UNKNOWN, uid="")
    return DashboardRole.from_session(data)


def _unauthenticated(message: str):
    return jsonify({"success": False, "message": message, "redirect": LANDING_ROUTE}), 401


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if IDENTITY_KEY not in session:
            return _unauthenticated("Please sign in to continue")
        return view(*args, **kwargs)

    return wrapper


def action_required(action: Action):
    """Allow the view only for roles whose dashboard offers `action`."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if IDENTITY_KEY not in session:
                return _unauthenticated("Please sign in to continue")
            current_role().require(action)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def install_idle_logout(app: Flask, *, minutes: int, clock: Callable[[], float] = time.time) -> None:
    idle = timedelta(minutes=minutes).total_seconds()

    @app.before_request
    def idle_logout():
        if IDENTITY_KEY not in session:
            return None

        now = clock()
        last_seen = session.get(LAST_SEEN_KEY)
        if last_seen is not None and now - float(last_seen) > idle:
            uid = session[IDENTITY_KEY].get("uid")
            sign_out()
            current_app.logger.info("Signed out uid=%s after %s idle minutes", uid, minutes)
            return _unauthenticated("Signed out after inactivity")

        session[LAST_SEEN_KEY] = now
        return None

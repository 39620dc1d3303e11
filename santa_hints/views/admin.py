from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request
from flask.views import MethodView
from flask_login import login_user, logout_user

from ..extensions import limiter
from ..models import ADMIN
from ..policies import AdminRequiredMixin, get_store, is_admin_user
from ..security import PASSWORD_MAX_LENGTH, verify_admin_password
from ..services.assignments import AssignmentError, list_participants, regenerate
from . import json_body


logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def _login_rate_limit() -> str:
    return current_app.config["ADMIN_LOGIN_RATE_LIMIT"]


class LoginView(MethodView):
    decorators = [
        limiter.limit(
            _login_rate_limit,
            methods=["POST"],
            error_message="Too many login attempts, please try again later.",
        )
    ]

    def post(self):
        password = json_body().get("password")
        if not password or not isinstance(password, str) or len(password) > PASSWORD_MAX_LENGTH:
            return jsonify(error="Invalid password format"), 400

        if not verify_admin_password(password):
            logger.warning("Failed admin login from %s", request.remote_addr)
            return jsonify(success=False, message="Invalid password")

        login_user(ADMIN, remember=True, duration=current_app.config["REMEMBER_COOKIE_DURATION"])
        logger.info("Admin logged in from %s", request.remote_addr)
        return jsonify(success=True)


class LogoutView(MethodView):
    def post(self):
        logout_user()
        return jsonify(success=True)


class CheckSessionView(MethodView):
    def get(self):
        return jsonify(authenticated=is_admin_user())


class ParticipantsView(AdminRequiredMixin):
    def get(self):
        return jsonify([
            {
                "id": entry.participant.id,
                "name": entry.participant.name,
                "code": entry.participant.code,
                "gives_to_name": entry.gives_to_name,
                **entry.participant.hints,
            }
            for entry in list_participants(get_store())
        ])


class RegenerateView(AdminRequiredMixin):
    def post(self):
        try:
            entries = regenerate(get_store(), current_app.config["SANTA_ROSTER"])
        except AssignmentError as e:
            return jsonify(success=False, error=str(e)), 400

        return jsonify(
            success=True,
            participants=[
                {"name": entry.participant.name, "code": entry.participant.code, "gives_to_name": entry.gives_to_name}
                for entry in entries
            ],
        )


admin_bp.add_url_rule("/login", view_func=LoginView.as_view("login"), methods=["POST"])
admin_bp.add_url_rule("/logout", view_func=LogoutView.as_view("logout"), methods=["POST"])
admin_bp.add_url_rule("/check-session", view_func=CheckSessionView.as_view("check_session"), methods=["GET"])
admin_bp.add_url_rule("/participants", view_func=ParticipantsView.as_view("participants"), methods=["GET"])
admin_bp.add_url_rule("/regenerate", view_func=RegenerateView.as_view("regenerate"), methods=["POST"])

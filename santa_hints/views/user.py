from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask.views import MethodView
from flask_wtf.csrf import generate_csrf

from ..policies import get_store
from ..services.hints import get_hints_for, save_hint
from ..services.lookup import Resolution, resolve_by_code, reveal_santa_for
from ..services.validation import InvalidInput
from . import json_body


user_bp = Blueprint("user", __name__, url_prefix="/api")

USER_CODE_COOKIE = "user_code"


def _bad_request(e: InvalidInput):
    return jsonify(error=str(e)), 400


def _invalid_code():
    return jsonify(success=False, message="Invalid code")


def _session_payload(resolution: Resolution) -> dict:
    me = resolution.participant
    santa = resolution.given_by
    return {
        "giveData": {
            "id": me.id,
            "name": me.name,
            "code": me.code,
            "gives_to_id": resolution.gives_to.id,
            "gives_to_name": resolution.gives_to.name,
            **me.hints,
        },
        # Only the hints: the Santa's name and code stay hidden until revealed.
        "receiveData": santa.hints if santa else {},
    }


class CsrfTokenView(MethodView):
    def get(self):
        return jsonify(csrf_token=generate_csrf())


class VerifyCodeView(MethodView):
    def post(self):
        try:
            resolution = resolve_by_code(get_store(), json_body().get("code"))
        except InvalidInput as e:
            return _bad_request(e)

        if resolution is None:
            return _invalid_code()

        response = jsonify(success=True, **_session_payload(resolution))
        response.set_cookie(
            USER_CODE_COOKIE,
            resolution.participant.code,
            max_age=current_app.config["USER_CODE_MAX_AGE"],
            httponly=True,
            secure=current_app.config["SESSION_COOKIE_SECURE"],
            samesite="Strict",
            path="/",
        )
        return response


class CheckSessionView(MethodView):
    def get(self):
        code = request.cookies.get(USER_CODE_COOKIE)
        if not code:
            return jsonify(authenticated=False)

        try:
            resolution = resolve_by_code(get_store(), code)
        except InvalidInput:
            return jsonify(authenticated=False)

        if resolution is None:
            return jsonify(authenticated=False)
        return jsonify(authenticated=True, **_session_payload(resolution))


class LogoutView(MethodView):
    def post(self):
        response = jsonify(success=True)
        response.delete_cookie(USER_CODE_COOKIE, path="/")
        return response


class SaveHintView(MethodView):
    def post(self):
        body = json_body()
        code = body.get("code") or request.cookies.get(USER_CODE_COOKIE)
        hint_number = body.get("hintNumber")

        try:
            saved = save_hint(get_store(), code, hint_number, body.get("hintText"))
        except InvalidInput as e:
            return _bad_request(e)

        if not saved:
            return _invalid_code()
        return jsonify(success=True, message=f"Hint {hint_number} saved!")


class GetHintsView(MethodView):
    def get(self):
        return self._hints(request.args.get("code"))

    def post(self):
        return self._hints(json_body().get("code"))

    def _hints(self, code):
        try:
            hints = get_hints_for(get_store(), code)
        except InvalidInput as e:
            return _bad_request(e)

        if hints is None:
            return _invalid_code()
        return jsonify(success=True, data=hints)


class RevealSantaView(MethodView):
    def post(self):
        try:
            revealed = reveal_santa_for(get_store(), json_body().get("code"))
        except InvalidInput as e:
            return _bad_request(e)

        if revealed is None:
            return _invalid_code()
        santa, recipient = revealed
        return jsonify(success=True, santa=santa, recipient=recipient)


user_bp.add_url_rule("/csrf-token", view_func=CsrfTokenView.as_view("csrf_token"), methods=["GET"])
user_bp.add_url_rule("/verify-code", view_func=VerifyCodeView.as_view("verify_code"), methods=["POST"])
user_bp.add_url_rule("/check-session", view_func=CheckSessionView.as_view("check_session"), methods=["GET"])
user_bp.add_url_rule("/logout", view_func=LogoutView.as_view("logout"), methods=["POST"])
user_bp.add_url_rule("/save-hint", view_func=SaveHintView.as_view("save_hint"), methods=["POST"])
user_bp.add_url_rule("/get-hints", view_func=GetHintsView.as_view("get_hints"), methods=["GET", "POST"])
user_bp.add_url_rule("/reveal-santa", view_func=RevealSantaView.as_view("reveal_santa"), methods=["POST"])

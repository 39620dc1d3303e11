from __future__ import annotations

from flask import current_app, jsonify
from flask.views import MethodView
from flask_login import current_user

from .extensions import login_manager
from .models import ADMIN
from .services.store import ParticipantStore


def is_admin_user() -> bool:
    return current_user.is_authenticated and current_user.get_id() == ADMIN.id


def get_store() -> ParticipantStore:
    return current_app.extensions["participant_store"]


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify(error="Unauthorized"), 401


# --------- Class-based view Mixins ----------

class AdminRequiredMixin(MethodView):
    def dispatch_request(self, *args, **kwargs):
        if not is_admin_user():
            return login_manager.unauthorized()
        return super().dispatch_request(*args, **kwargs)

from __future__ import annotations

import logging
import os
from datetime import timedelta

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_limiter import RateLimitExceeded
from flask_wtf.csrf import CSRFError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.middleware.proxy_fix import ProxyFix

from .extensions import db, login_manager, migrate, csrf, limiter
from .services.store import ParticipantStore, SqlParticipantStore
from .cli import santa_cli
from .views.admin import admin_bp
from .views.user import user_bp


logger = logging.getLogger(__name__)

DEFAULT_ROSTER = ["Britten", "Manivald", "Dima", "Sasha", "Henrik", "Andreas"]


def _roster_from_env() -> list[str]:
    raw = os.environ.get("SANTA_ROSTER", "")
    names = [name.strip() for name in raw.split(",") if name.strip()]
    return names or list(DEFAULT_ROSTER)


def _is_production() -> bool:
    return "production" in {os.environ.get("FLASK_ENV"), os.environ.get("NODE_ENV")}


def create_app(test_config: dict | None = None, store: ParticipantStore | None = None) -> Flask:
    load_dotenv()

    app = Flask(__name__)

    app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret-change-me")
    app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get("DATABASE_URL", "sqlite:///secret_santa.db")
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["MAX_CONTENT_LENGTH"] = 10 * 1024

    # sha256 hex digest or argon2 hash, see `flask santa hash-password`
    app.config["ADMIN_PASS_HASH"] = os.environ.get("ADMIN_PASS_HASH", "").strip()
    app.config["SANTA_ROSTER"] = _roster_from_env()

    app.config["ADMIN_LOGIN_RATE_LIMIT"] = os.environ.get("ADMIN_LOGIN_RATE_LIMIT", "5 per 15 minutes")
    app.config["RATELIMIT_ENABLED"] = True
    app.config["RATELIMIT_STORAGE_URI"] = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")
    app.config["RATELIMIT_HEADERS_ENABLED"] = True

    secure = _is_production()
    app.config["SESSION_COOKIE_SECURE"] = secure
    app.config["SESSION_COOKIE_SAMESITE"] = "Strict"
    app.config["REMEMBER_COOKIE_SECURE"] = secure
    app.config["REMEMBER_COOKIE_SAMESITE"] = "Strict"
    app.config["REMEMBER_COOKIE_DURATION"] = timedelta(days=7)
    app.config["USER_CODE_MAX_AGE"] = timedelta(days=30)

    # Number of reverse proxies in front of the app; 0 trusts the socket address.
    app.config["PROXY_FIX_X_FOR"] = int(os.environ.get("PROXY_FIX_X_FOR", "0"))

    app.config["LOG_LEVEL"] = os.environ.get("LOG_LEVEL", "INFO").upper()

    if test_config:
        app.config.update(test_config)

    logging.getLogger(__package__).setLevel(app.config["LOG_LEVEL"])

    hops = app.config["PROXY_FIX_X_FOR"]
    if hops:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops)

    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)
    limiter.init_app(app)

    app.extensions["participant_store"] = store or SqlParticipantStore()

    # Blueprints
    app.register_blueprint(admin_bp)
    app.register_blueprint(user_bp)
    app.cli.add_command(santa_cli)

    _register_error_handlers(app)

    if not app.config["ADMIN_PASS_HASH"]:
        logger.warning("ADMIN_PASS_HASH is not set; admin login will fail until it is provided")

    with app.app_context():
        db.create_all()

    return app


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(SQLAlchemyError)
    def storage_error(e):
        db.session.rollback()
        logger.exception("Storage error")
        return jsonify(error=str(e)), 500

    @app.errorhandler(CSRFError)
    def csrf_error(e):
        return jsonify(error=e.description), 400

    @app.errorhandler(RateLimitExceeded)
    def rate_limited(e):
        return jsonify(error=e.description), 429

    @app.errorhandler(413)
    def too_large(e):
        return jsonify(error="Request body too large"), 413

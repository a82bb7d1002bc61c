# quizgame/__init__.py
from __future__ import annotations
import json
import logging
import os
import secrets
from pathlib import Path

import click
from flask import Flask, g, render_template
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .config import Config
from .db import db

# --- extensions ---
migrate = Migrate()
# in-memory limiter; point RATELIMIT_STORAGE_URI at redis when running several workers
limiter = Limiter(get_remote_address, storage_uri="memory://")


def create_app(config_object=None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)

    # ---------------------------
    # Config
    # ---------------------------
    app.config.from_object(config_object or Config)
    app.config.from_pyfile("config.py", silent=True)  # instance/config.py (optional)

    app.config.setdefault(
        "SQLALCHEMY_DATABASE_URI",
        os.getenv("SQLALCHEMY_DATABASE_URI") or os.getenv("DATABASE_URL")
    )
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        raise RuntimeError(
            "Missing SQLALCHEMY_DATABASE_URI (or DATABASE_URL). "
            "Set it via env or instance/config.py."
        )
    if not app.config.get("SECRET_KEY"):
        app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY") or secrets.token_hex(32)

    # ---------------------------
    # Logging
    # ---------------------------
    level = logging.DEBUG if app.debug else logging.INFO
    app.logger.setLevel(level)
    for name in ("quizgame", "quizgame.games.core", "quizgame.games.randomplay"):
        logging.getLogger(name).setLevel(level)
    logging.getLogger("werkzeug").setLevel(level)

    # ---------------------------
    # Extensions init
    # ---------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    from . import models  # noqa: F401  register tables before create_all / migrations

    # ---------------------------
    # Blueprints
    # ---------------------------
    from .home.routes import bp as home_bp
    from .quizzes.routes import bp as quizzes_bp
    from .games.randomplay.routes import bp as randomplay_bp

    app.register_blueprint(home_bp)
    app.register_blueprint(quizzes_bp)
    app.register_blueprint(randomplay_bp)

    _register_error_handlers(app)
    _register_cli(app)

    @app.before_request
    def _set_csp_nonce():
        g.csp_nonce = secrets.token_urlsafe(16)

    @app.context_processor
    def _inject_csp_nonce():
        return {"csp_nonce": getattr(g, "csp_nonce", "")}

    @app.after_request
    def set_security_headers(resp):
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        resp.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "img-src 'self' data:; "
            "style-src 'self' 'unsafe-inline'; "
            f"script-src 'self' 'nonce-{getattr(g, 'csp_nonce', '')}'"
        )
        return resp

    app.logger.info("quizgame app created (db=%s)", app.config["SQLALCHEMY_DATABASE_URI"].split("://", 1)[0])
    return app


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(SQLAlchemyError)
    def _database_error(err):
        db.session.rollback()
        app.logger.exception("database error: %s", err)
        return render_template("error.html", code=500, message="Something went wrong on our side."), 500

    @app.errorhandler(HTTPException)
    def _http_error(err):
        return render_template("error.html", code=err.code, message=err.description), err.code


def _register_cli(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (use `flask db upgrade` once migrations exist)."""
        db.create_all()
        click.echo("✅ Tables created.")

    @app.cli.command("seed-quizzes")
    @click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    def seed_quizzes_cmd(path: Path):
        """Load quizzes (and their tips) from a JSON file."""
        from .seed import seed_quizzes
        data = json.loads(path.read_text(encoding="utf-8"))
        added = seed_quizzes(data)
        click.echo(f"✅ Added {added} quizzes from {path}")


# -*- coding: utf-8 -*-
from datetime import datetime, date
from flask import Flask, jsonify

from .config import Config, ensure_instance, configure_logging
from .errors import register_error_handlers
from .extensions import db, migrate
from .payroll import format_money

# blueprints
from .modules.workers import bp as workers_bp
from .modules.advances import bp as advances_bp
from .modules.dashboard import bp as dashboard_bp
from .modules.slips import bp as slips_bp
from .modules.backup import bp as backup_bp


def create_app(config=None):
    app = Flask(
        __name__,
        instance_relative_config=True,
        template_folder="templates",
    )
    app.config.from_object(config or Config)
    ensure_instance(app)
    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)

    # --- jinja filters ---
    @app.template_filter("fmt_date")
    def fmt_date(value, fmt="%d %b %Y"):
        if value in (None, ""):
            return ""
        try:
            if isinstance(value, (datetime, date)):
                return value.strftime(fmt)
            return date.fromisoformat(str(value)[:10]).strftime(fmt)
        except ValueError:
            return str(value)

    @app.template_filter("fmt_money")
    def fmt_money(v):
        return f"{app.config['HISAB_CURRENCY']} {format_money(v)}"

    register_error_handlers(app)

    # --- blueprints ---
    prefix = app.config.get("HISAB_API_PREFIX", "/api").rstrip("/")
    for bp in (workers_bp, advances_bp, dashboard_bp, slips_bp, backup_bp):
        app.register_blueprint(bp, url_prefix=prefix + (bp.url_prefix or ""))

    @app.get("/")
    def home():
        return jsonify({"ok": True, "app": app.config["HISAB_COMPANY"], "api": prefix})

    with app.app_context():
        from . import models  # noqa: F401
        db.create_all()

    return app

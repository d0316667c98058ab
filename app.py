import time
from typing import Any, Mapping

from flask import Flask, redirect, render_template, request, url_for

from api.blueprint import create_api_blueprint
from api.pages.rendering import EXTENSION_KEY
from config import env_overrides
from crud.admin import Admin
from db import init_db, make_engine
from logging_utils import configure_app_logging, get_logger


def create_admin(config: Mapping[str, Any]) -> Admin:
    """Build the Admin object from Flask config keys.

    Raises ConnectionFailure when the database cannot be reached.
    """

    engine = make_engine(config.get("DATABASE_URI"), config.get("DATABASE_ENGINE"))

    if config.get("INIT_DB_ON_STARTUP"):
        get_logger(__name__).info("INIT_DB_ON_STARTUP=1; creating demo tables")
        init_db(engine)

    return Admin(
        engine,
        base_url=config.get("ADMIN_BASE_URL") or "/admin",
        entities=config.get("ADMIN_ENTITIES") or (),
        default_formatters=config.get("ADMIN_DEFAULT_FORMATTERS") or {},
        user_identifier=config.get("ADMIN_USER_IDENTIFIER"),
        permission_checker=config.get("ADMIN_PERMISSION_CHECKER"),
        templates=config.get("ADMIN_TEMPLATES") or {},
        statement_timeout=config.get("STATEMENT_TIMEOUT_S"),
    )


def create_app(test_config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)

    # Defaults from file, then environment, then explicit overrides.
    app.config.from_pyfile("settings.py")
    app.config.from_mapping(env_overrides())
    if test_config:
        app.config.from_mapping(test_config)

    # Configure unified app logging (UTC timestamps, per-file logs, daily rotation)
    configure_app_logging(app.config.get("LOG_LEVEL", "INFO"))
    logger = get_logger(__name__)

    admin = create_admin(app.config)
    app.extensions[EXTENSION_KEY] = admin

    # --- slow request logging (opt-in by threshold; default 250ms) ---
    # Set to 0 to disable.
    slow_ms = int(app.config.get("SLOW_REQUEST_MS") or 0)

    @app.before_request
    def _start_timer():
        if slow_ms > 0:
            request.environ["_req_start_ns"] = time.perf_counter_ns()

    @app.after_request
    def _log_slow_requests(resp):
        if slow_ms <= 0:
            return resp

        start_ns = request.environ.get("_req_start_ns")
        if not start_ns:
            return resp

        elapsed_ms = (time.perf_counter_ns() - int(start_ns)) / 1_000_000.0
        if elapsed_ms >= slow_ms:
            # Keep it compact and stable for grepping.
            logger.warning(
                "SLOW_REQUEST ms=%.1f status=%s method=%s path=%s query=%s",
                elapsed_ms,
                getattr(resp, "status_code", "?"),
                request.method,
                request.path,
                request.query_string.decode("utf-8", errors="replace"),
            )
        return resp

    app.register_blueprint(create_api_blueprint(), url_prefix=admin.base_url or None)

    if admin.base_url:

        @app.route("/", methods=["GET"])
        def index():
            return redirect(url_for("admin.dashboard.dashboard"))

    # Error handlers outside the admin blueprint
    @app.errorhandler(404)
    def not_found(_err):
        return render_template("errors/404.html"), 404

    @app.errorhandler(500)
    def server_error(_err):
        logger.exception("Unhandled server error")
        return render_template("errors/500.html"), 500

    return app


if __name__ == "__main__":
    app = create_app()
    get_logger(__name__).info("Starting Flask app")
    app.run(debug=True, use_reloader=False)

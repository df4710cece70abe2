"""
Factory for the lightfoot REST API.

Serves the cashier POS, the customer kiosk, the kitchen board and the manager
screens from one Flask app. Routes keep the paths the React front-ends call.
"""

from __future__ import annotations

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from lightfoot_api.routes import api_bp
from lightfoot_shared.config import AppConfig, load_config, set_active_config
from lightfoot_shared.db import get_session, init_db, init_engine
from lightfoot_shared.error_handlers import register_error_handlers
from lightfoot_shared.logging_config import configure_logging
from lightfoot_shared.models import Base
from lightfoot_shared.services.seed import load_seed_data

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def _allowed_origins(config: AppConfig) -> list[str]:
    raw = config.get_string("cors_allowed_origins")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or DEFAULT_ALLOWED_ORIGINS


def create_app() -> Flask:
    app = Flask(__name__)
    config = load_config("lightfoot-api")
    set_active_config(config)

    configure_logging(config.app_name, config.log_level)

    # Database
    init_engine(config)
    init_db(Base.metadata)

    if config.get_bool("load_seed_data"):
        app.logger.info("Initializing seed data...")
        with get_session() as session:
            load_seed_data(session)

    # Basic Config
    app.config["SECRET_KEY"] = config.secret_key
    app.config["APP_NAME"] = "Lightfoot API"
    app.config["DEBUG_MODE"] = config.debug_mode
    app.config["DEBUG"] = config.flask_debug
    app.json.sort_keys = False

    app.register_blueprint(api_bp)

    # Error Handlers
    register_error_handlers(app)

    # ProxyFix: Trust X-Forwarded-* headers from reverse proxy
    num_proxies = config.get_int("num_proxies")
    if num_proxies > 0:
        app.wsgi_app = ProxyFix(
            app.wsgi_app,
            x_for=num_proxies,
            x_proto=num_proxies,
            x_host=num_proxies,
            x_port=num_proxies,
        )

    CORS(app, resources={r"/*": {"origins": _allowed_origins(config)}})

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "service": "lightfoot-api"}), 200

    return app

#!/usr/bin/env python3
"""
Assignment Checker - AI Vulnerability Analysis for Assignment Prompts
=====================================================================
Run: python3 -m assignment_checker.app
Then POST to: http://localhost:8080/api/analyze
"""

import logging

from flask import Flask, jsonify
from flask_cors import CORS

from assignment_checker.auth import init_auth
from assignment_checker.config import config as default_config
from assignment_checker.database import UserStore
from assignment_checker.routes import register_routes
from assignment_checker.services.model_client import GeminiClient

logger = logging.getLogger(__name__)


def create_app(app_config=None, model_client=None, user_store=None):
    """
    Build the Flask application.

    Args:
        app_config: Config instance (defaults to the global config).
        model_client: Object with generate(prompt) -> str. Defaults to a
            GeminiClient built from the config.
        user_store: UserStore instance. Defaults to one at config.database_path.
    """
    cfg = app_config or default_config

    app = Flask(__name__)
    app.config.update(
        JWT_SECRET=cfg.jwt_secret,
        JWT_EXPIRES_HOURS=cfg.jwt_expires_hours,
        REQUIRE_AUTH_FOR_ANALYZE=cfg.require_auth_for_analyze,
        MAX_CONTENT_LENGTH=cfg.max_content_length,
    )

    # ══════════════════════════════════════════════════════════════
    # CORS
    # ══════════════════════════════════════════════════════════════
    CORS(
        app,
        resources={r"/api/*": {"origins": cfg.cors_origins}},
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "OPTIONS"],
        expose_headers=["X-Analysis-Status", "Content-Disposition"],
    )

    # ══════════════════════════════════════════════════════════════
    # COLLABORATORS
    # ══════════════════════════════════════════════════════════════
    if model_client is None:
        model_client = GeminiClient(cfg.gemini_api_key, cfg.gemini_model)
    if user_store is None:
        user_store = UserStore(cfg.database_path)
    user_store.init_db()

    app.extensions['model_client'] = model_client
    app.extensions['user_store'] = user_store

    # ══════════════════════════════════════════════════════════════
    # AUTHENTICATION
    # ══════════════════════════════════════════════════════════════
    init_auth(app)
    register_routes(app)

    @app.errorhandler(413)
    def file_too_large(e):
        return jsonify({"text": "(File too large)"}), 413

    @app.route('/')
    def index():
        return 'AI Assignment Checker Backend is running.'

    @app.route('/api/health')
    def health():
        return jsonify({
            "status": "ok",
            "model": getattr(model_client, 'model_name', None),
            "auth_required": bool(cfg.require_auth_for_analyze),
        })

    return app


# ══════════════════════════════════════════════════════════════
# MAIN
# ══════════════════════════════════════════════════════════════

def main():
    logging.basicConfig(
        level=getattr(logging, str(default_config.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not default_config.gemini_api_key:
        logger.warning("GEMINI_API_KEY not set; analyses will return a failure message")
    if not default_config.jwt_secret:
        logger.warning("JWT_SECRET not set; register and login answer 503")

    app = create_app()
    logger.info("Backend server running on http://%s:%s", default_config.host, default_config.port)
    app.run(host=default_config.host, port=default_config.port, debug=default_config.debug, threaded=True)


if __name__ == '__main__':
    main()

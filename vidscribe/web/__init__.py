"""Flask application factory for the vidscribe web API."""

import time

from flask import Flask, jsonify
from flask_cors import CORS

from vidscribe.config import GatewayConfig

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def create_app(gateway_config: GatewayConfig | None = None) -> Flask:
    app = Flask(__name__)
    # 500 MB of media grows by a third once base64-encoded
    app.config["MAX_CONTENT_LENGTH"] = 700 * 1024 * 1024
    # None: read the environment on every request
    app.config["GATEWAY_CONFIG"] = gateway_config
    app.config["PROGRESS_SLEEP"] = time.sleep

    CORS(
        app,
        resources={r"/api/*": {"origins": "*"}},
        allow_headers=CORS_ALLOW_HEADERS,
        send_wildcard=True,
    )

    from vidscribe.web.routes import bp
    app.register_blueprint(bp)

    @app.errorhandler(413)
    def request_entity_too_large(error):
        return jsonify({"error": "File too large", "success": False}), 413

    return app

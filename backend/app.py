import atexit
import logging
import os

from blueprints.applications import applications_bp
from blueprints.auth import auth_bp
from blueprints.companies import companies_bp
from blueprints.jobs import jobs_bp
from blueprints.profile import profile_bp
from blueprints.recommendations import recommendations_bp
from blueprints.system import system_bp
from config import Config
from flask import Flask, jsonify
from flask_cors import CORS
from flask_jwt_extended import JWTManager

from services.shared import close_all_pools
from services.shared.structured_logging import configure_logging

configure_logging(logging.INFO)
logger = logging.getLogger(__name__)


def create_app(config_object=Config):
    """Application factory function."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    jwt = JWTManager(app)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"msg": "Token has expired"}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        logger.error(f"Invalid token error: {str(error)}")
        return jsonify({"msg": f"Invalid token: {str(error)}"}), 422

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return jsonify({"msg": "Missing authorization header"}), 401

    CORS(
        app,
        origins=config_object.CORS_ORIGINS,
        supports_credentials=True,
        allow_headers=["Content-Type", "Authorization"],
    )

    app.register_blueprint(auth_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(jobs_bp)
    app.register_blueprint(recommendations_bp)
    app.register_blueprint(applications_bp)
    app.register_blueprint(companies_bp)
    app.register_blueprint(system_bp)

    return app


# Close connection pools on process exit for graceful cleanup
atexit.register(close_all_pools)

app = create_app()

if __name__ == "__main__":
    debug = os.getenv("ENVIRONMENT", "development") == "development"
    app.run(host="0.0.0.0", port=5000, debug=debug, use_reloader=debug)

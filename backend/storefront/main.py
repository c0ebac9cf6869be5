import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_login import LoginManager

from storefront.core.api_utils import register_error_handlers
from storefront.core.auth_decorators import load_principal_from_request
from storefront.core.config import (
    get_jwt_secret_key,
    get_rate_limit_enabled,
    is_production,
    log_security_config,
)
from storefront.core.limiter_config import limiter
from storefront.core.logging_config import setup_logging
from storefront.db.session import create_tables

load_dotenv()


def create_app() -> Flask:
    """Application factory: logging, auth, rate limiting, blueprints."""
    app = Flask(__name__)
    production = is_production()

    if os.getenv("TESTING", "").lower() in ("true", "1", "yes"):
        app.config["TESTING"] = True

    setup_logging(
        app=app,
        log_level=logging.INFO if production else logging.DEBUG,
        enable_sql_echo=os.getenv("SQL_ECHO", "0") == "1",
        use_json_format=production,
    )
    logger = logging.getLogger(__name__)

    # Fails fast in production when the secret is weak
    app.config["SECRET_KEY"] = os.getenv("FLASK_SECRET_KEY", get_jwt_secret_key())
    app.config["JSON_SORT_KEYS"] = False
    log_security_config()

    app.config["RATELIMIT_STORAGE_URI"] = os.getenv("LIMITER_STORAGE_URI", "memory://")
    limiter.init_app(app)
    if not get_rate_limit_enabled():
        limiter.enabled = False
        logger.info("Rate limiting disabled", extra={"context": {"testing": app.testing}})

    # Stateless bearer-token authentication; no sessions are created
    login_manager = LoginManager()
    login_manager.init_app(app)

    @login_manager.request_loader
    def load_user_from_request(request):
        return load_principal_from_request(request)

    @login_manager.unauthorized_handler
    def unauthorized():
        return (
            jsonify({"error": "Unauthorized", "message": "Authentication required"}),
            401,
        )

    from storefront.controllers.auth_controller import auth_bp
    from storefront.controllers.category_controller import category_bp
    from storefront.controllers.client_controller import client_bp
    from storefront.controllers.health_controller import health_bp
    from storefront.controllers.order_controller import order_bp
    from storefront.controllers.product_controller import product_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(category_bp)
    app.register_blueprint(client_bp)
    app.register_blueprint(product_bp)
    app.register_blueprint(order_bp)
    app.register_blueprint(health_bp)

    register_error_handlers(app)

    create_tables()
    logger.info("Application created", extra={"context": {"production": production}})
    return app

"""
Pen inventory backend - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration (credentials read once, fail-fast)
2. Builds the Firebase inventory store and Sheets order log
3. Creates the staging store and finalization services
4. Registers route blueprints
5. Sets up CORS, request ids and JSON error handlers

ARCHITECTURE:
    Flask request threads
    ├── /temp-save, /temp-order  -> StagingStore (in-memory, locked)
    ├── /payment-webhook         -> OrderFinalizer
    │                               ├── InventoryService -> Firebase RTDB
    │                               └── OrderLogService  -> Google Sheets
    └── /log                     -> OrderLogService

The StagingStore is the only shared mutable state. It lives in app.config,
never in a module global, so each app (and each test) gets its own.
"""

from __future__ import annotations

import logging
import uuid

from flask import Flask, g, request
from werkzeug.exceptions import HTTPException

from logging_config import setup_logging, get_logger
from core.exceptions import ConfigurationError, PenInventoryError
from core.inventory_store import FirebaseInventoryStore
from core.sheets_client import GoogleSheetsOrderLog
from services.staging_store import StagingStore
from services.inventory_service import InventoryService
from services.order_log_service import OrderLogService
from services.order_finalizer import OrderFinalizer
from routes import register_blueprints


# Module logger (configured after setup_logging)
logger = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def create_app(
    config_object="config.Config",
    inventory_store=None,
    order_log=None,
    staging_store: StagingStore = None
) -> Flask:
    """
    Application factory - creates and configures Flask app.

    FAIL-FAST: Missing Firebase or Sheets credentials stop the app from
    starting. Tests pass their own collaborators instead.

    Args:
        config_object: Config class or import path
        inventory_store: Counter store (default: FirebaseInventoryStore from config)
        order_log: Row appender (default: GoogleSheetsOrderLog from config)
        staging_store: Staging store (default: new in-memory StagingStore)

    Returns:
        Configured Flask application

    Raises:
        ConfigurationError: If credentials are missing from the environment
    """
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(log_level=log_level, enable_file_logging=enable_file_logging)
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting pen inventory backend in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # COLLABORATORS (FAIL-FAST)
    # =========================================================================

    try:
        if inventory_store is None:
            inventory_store = FirebaseInventoryStore.from_config(app.config)
        if order_log is None:
            order_log = GoogleSheetsOrderLog.from_config(app.config)
    except ConfigurationError as e:
        logger.error(f"FATAL: Cannot start application - {e}")
        raise

    # =========================================================================
    # SERVICES INITIALIZATION
    # =========================================================================

    if staging_store is None:
        staging_store = StagingStore(
            max_age_seconds=app.config.get("STAGED_ORDER_MAX_AGE_SECONDS")
        )
    inventory_service = InventoryService(inventory_store)
    order_log_service = OrderLogService(order_log)

    app.config["STAGING_STORE"] = staging_store
    app.config["INVENTORY_SERVICE"] = inventory_service
    app.config["ORDER_LOG_SERVICE"] = order_log_service
    app.config["ORDER_FINALIZER"] = OrderFinalizer(
        staging_store, inventory_service, order_log_service
    )
    logger.info("Services initialized")

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # REQUEST HOOKS (request ids, CORS)
    # =========================================================================

    @app.before_request
    def assign_request_id():
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

    @app.before_request
    def answer_preflight():
        """Answer CORS preflight for any path."""
        if request.method == "OPTIONS":
            return "OK", 200, {"Content-Type": "text/plain; charset=utf-8"}
        return None

    @app.after_request
    def add_cors_headers(response):
        for header, value in CORS_HEADERS.items():
            response.headers[header] = value
        return response

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(PenInventoryError)
    def handle_app_error(e: PenInventoryError):
        logger.warning(f"Unhandled application error: {e}")
        return {"error": e.message}, e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return {"error": e.name}, e.code

    @app.errorhandler(Exception)
    def handle_server_error(e: Exception):
        logger.error(f"500 error: {e}", exc_info=True)
        return {"error": "Internal Server Error"}, 500

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(
        host="0.0.0.0",
        port=app.config.get("PORT", 3000),
        debug=app.config.get("DEBUG", False),
    )

"""
Main routes (liveness, health).

Handles:
- / - Plain-text liveness string
- /health - Health check with service status
"""

from flask import Blueprint, current_app

main_bp = Blueprint("main", __name__)

LIVENESS_MESSAGE = "Pen inventory backend is live."


@main_bp.route("/", methods=["GET"])
def index():
    """Liveness check used by the hosting platform."""
    return LIVENESS_MESSAGE, 200, {"Content-Type": "text/plain; charset=utf-8"}


@main_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint with service status."""
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {}
    }

    staging_store = current_app.config.get("STAGING_STORE")
    if staging_store is not None:
        health_status["checks"]["staging_store"] = "ok"
        health_status["staged_orders"] = len(staging_store)
    else:
        health_status["checks"]["staging_store"] = "not_available"
        health_status["status"] = "degraded"

    for name, key in (("inventory", "INVENTORY_SERVICE"), ("order_log", "ORDER_LOG_SERVICE")):
        if current_app.config.get(key) is not None:
            health_status["checks"][name] = "configured"
        else:
            health_status["checks"][name] = "not_configured"
            health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code

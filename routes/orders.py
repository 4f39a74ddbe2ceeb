"""
Temporary order routes.

Handles:
- POST /temp-save - Stage a customization, returns its tempOrderId
- GET /temp-order/<tempOrderId> - Fetch a staged customization

Staged orders live in the StagingStore (app.config["STAGING_STORE"]) until
the payment webhook finalizes them.
"""

from flask import Blueprint, current_app, request

from core.exceptions import TempOrderNotFoundError, ValidationError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

orders_bp = Blueprint("orders", __name__)


@orders_bp.route("/temp-save", methods=["POST"])
def temp_save():
    """
    Save a customization temporarily.

    Body: {"pen": "...", "trinkets": [...]}
    Returns: {"tempOrderId": "..."}
    """
    try:
        customization = request.get_json(silent=True)
        staging_store = current_app.config["STAGING_STORE"]

        temp_order_id = staging_store.stage(customization)
        return {"tempOrderId": temp_order_id}

    except ValidationError as e:
        logger.warning(f"Rejected customization: {e}")
        return {"error": e.message}, 400

    except Exception as e:
        logger.error(f"Error saving customization: {e}", exc_info=True)
        return {"error": "Internal Server Error"}, 500


@orders_bp.route("/temp-order/<temp_order_id>", methods=["GET"])
def temp_order(temp_order_id: str):
    """Retrieve a saved customization exactly as it was posted."""
    staging_store = current_app.config["STAGING_STORE"]

    try:
        return staging_store.get(temp_order_id)
    except TempOrderNotFoundError:
        logger.info(f"Temp order not found: {temp_order_id}")
        return {"error": "Temp order not found"}, 404

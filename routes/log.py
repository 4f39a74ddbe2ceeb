"""
Direct order log route.

POST /log appends a row for a {pen, trinkets} payload without touching
staging or inventory. Used when finalization is driven by another system.
The payload is not validated: a missing trinkets list fails with the
iteration error and is reported as a 500.
"""

from flask import Blueprint, current_app, request

from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

log_bp = Blueprint("log", __name__)

TEXT_PLAIN = {"Content-Type": "text/plain; charset=utf-8"}


@log_bp.route("/log", methods=["POST"])
def log_order():
    """Log a finalized order to the spreadsheet."""
    try:
        payload = request.get_json(silent=True) or {}
        order_log_service = current_app.config["ORDER_LOG_SERVICE"]

        order_log_service.log_order(payload.get("pen"), payload.get("trinkets"))
        return "Logged", 200, TEXT_PLAIN

    except Exception as e:
        logger.error(f"Error logging to sheet: {e}", exc_info=True)
        message = getattr(e, "message", None) or str(e)
        return f"Error: {message}", 500, TEXT_PLAIN

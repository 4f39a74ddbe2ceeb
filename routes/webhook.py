"""
Payment webhook route.

POST /payment-webhook is called by the payment processor with
{"tempOrderId": "...", "paymentStatus": "success" | ...}.

Responses:
    200 {"message": "Inventory updated and order logged."}
    400 {"message": "Payment not successful."}  - any non-success status
    404 {"error": "Temp order not found."}      - unknown or already finalized
    500 {"error": "Internal server error"}      - Firebase/Sheets failure

The processor only ever sees the generic 500 body; the underlying error is
in the server log.
"""

from flask import Blueprint, current_app, request

from core.exceptions import PaymentRejectedError, TempOrderNotFoundError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

webhook_bp = Blueprint("webhook", __name__)


@webhook_bp.route("/payment-webhook", methods=["POST"])
def payment_webhook():
    """Finalize a staged order when payment succeeds."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}

    temp_order_id = payload.get("tempOrderId")
    payment_status = payload.get("paymentStatus")
    logger.info(
        f"Webhook received: tempOrderId={temp_order_id} paymentStatus={payment_status}"
    )

    try:
        finalizer = current_app.config["ORDER_FINALIZER"]
        finalizer.finalize(temp_order_id, payment_status)

        return {"message": "Inventory updated and order logged."}, 200

    except PaymentRejectedError:
        return {"message": "Payment not successful."}, 400

    except TempOrderNotFoundError:
        logger.warning(f"Webhook for unknown tempOrderId: {temp_order_id}")
        return {"error": "Temp order not found."}, 404

    except Exception as e:
        logger.error(f"Error processing webhook: {e}", exc_info=True)
        return {"error": "Internal server error"}, 500

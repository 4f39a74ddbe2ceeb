"""
Payment webhook finalization.

Turns a staged customization into a committed order once the payment
processor reports success.

Flow:
    1. Reject any status other than "success" (before looking anything up)
    2. Atomically take the staged order out of the StagingStore
    3. Decrement pen and trinket inventory
    4. Append the order to the log spreadsheet
    5. On failure in 3 or 4, put the staged order back so the processor's
       retry can finalize it, and raise

Because step 2 removes the order under the store's lock, duplicate webhook
deliveries cannot both decrement inventory. The loser sees
TempOrderNotFoundError.

There is no compensation: if a trinket decrement fails after the pen was
decremented, the pen stays decremented and a retry decrements it again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from core.exceptions import CollaboratorError, PaymentRejectedError, PenInventoryError
from services.inventory_service import InventoryService
from services.order_log_service import OrderLogService
from services.staging_store import StagingStore
from logging_config import get_logger, get_order_logger


# Module logger
logger = get_logger(__name__)

PAYMENT_SUCCESS = "success"


@dataclass(frozen=True)
class FinalizeResult:
    """Outcome of a successful finalization."""

    temp_order_id: str
    pen: str
    trinket_ids: Tuple[str, ...]
    log_row: List[str] = field(default_factory=list)
    inventory: Dict[str, int] = field(default_factory=dict)


class OrderFinalizer:
    """
    Executes the finalize sequence for payment webhooks.

    Attributes:
        staging_store: Where customizations wait for payment
        inventory_service: Decrements counters
        order_log_service: Appends the log row
    """

    def __init__(
        self,
        staging_store: StagingStore,
        inventory_service: InventoryService,
        order_log_service: OrderLogService
    ):
        self.staging_store = staging_store
        self.inventory_service = inventory_service
        self.order_log_service = order_log_service

    def finalize(self, temp_order_id: str, payment_status: Any) -> FinalizeResult:
        """
        Finalize a staged order after a payment notification.

        Args:
            temp_order_id: Identifier returned by /temp-save
            payment_status: Status asserted by the payment processor

        Returns:
            FinalizeResult

        Raises:
            PaymentRejectedError: payment_status is not "success"
            TempOrderNotFoundError: Nothing staged under temp_order_id
            CollaboratorError: Inventory or log update failed (order restored)
        """
        if payment_status != PAYMENT_SUCCESS:
            logger.info(
                f"Payment not successful for tempOrderId {temp_order_id}: {payment_status!r}"
            )
            raise PaymentRejectedError(payment_status, temp_order_id)

        staged = self.staging_store.take(temp_order_id)
        order_logger = get_order_logger(temp_order_id)

        try:
            customization = staged.customization
            inventory = self.inventory_service.decrement_for(customization)
            log_row = self.order_log_service.log_customization(customization)
        except Exception as e:
            self.staging_store.restore(staged)
            order_logger.error(f"Finalization failed, staged order kept: {e}", exc_info=True)
            if isinstance(e, PenInventoryError):
                raise
            raise CollaboratorError(f"Finalization failed: {e}", e) from e

        order_logger.info("Inventory updated and order logged")
        return FinalizeResult(
            temp_order_id=temp_order_id,
            pen=customization.pen,
            trinket_ids=tuple(t.id for t in customization.trinkets),
            log_row=log_row,
            inventory=inventory,
        )

"""
Services layer for the pen inventory backend.

This module contains the business logic services:
- StagingStore: In-memory customizations awaiting payment
- InventoryService: Pen and trinket counter decrements
- OrderLogService: Order log rows
- OrderFinalizer: Payment webhook finalization sequence

Request Model:
    Flask request threads share one StagingStore (lock-protected).
    Inventory and log services are stateless wrappers over the
    Firebase and Sheets clients built once at startup.
"""

from .staging_store import StagingStore
from .inventory_service import InventoryService
from .order_log_service import OrderLogService
from .order_finalizer import OrderFinalizer, FinalizeResult, PAYMENT_SUCCESS

__all__ = [
    "StagingStore",
    "InventoryService",
    "OrderLogService",
    "OrderFinalizer",
    "FinalizeResult",
    "PAYMENT_SUCCESS",
]

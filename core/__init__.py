"""
Core module for the pen inventory backend.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
- credentials: Service-account settings helpers
- inventory_store: Firebase Realtime Database counters
- sheets_client: Google Sheets order log
"""

from .exceptions import (
    PenInventoryError,
    ConfigurationError,
    ValidationError,
    TempOrderNotFoundError,
    PaymentRejectedError,
    CollaboratorError,
    InventoryUpdateError,
    OrderLogError,
)
from .inventory_store import FirebaseInventoryStore, pen_path, trinket_quantity_path
from .sheets_client import GoogleSheetsOrderLog

__all__ = [
    "PenInventoryError",
    "ConfigurationError",
    "ValidationError",
    "TempOrderNotFoundError",
    "PaymentRejectedError",
    "CollaboratorError",
    "InventoryUpdateError",
    "OrderLogError",
    "FirebaseInventoryStore",
    "pen_path",
    "trinket_quantity_path",
    "GoogleSheetsOrderLog",
]

"""
Firebase Realtime Database inventory store.

Inventory counters live in two namespaces:
    pens/<penId>                   - quantity of a pen variant
    trinkets/<trinketId>/quantity  - quantity of a trinket

Each decrement runs as a Realtime Database transaction, so a single counter
is updated atomically even with other writers. There is NO atomicity across
counters: a failure half way through an order leaves earlier decrements
applied.

Usage:
    store = FirebaseInventoryStore.from_config(app.config)
    store.decrement(pen_path("classic-blue"))      # -> new quantity
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import firebase_admin
from firebase_admin import credentials, db

from .credentials import require_settings, service_account_info
from .exceptions import InventoryUpdateError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

FIREBASE_APP_NAME = "pen-inventory"


def pen_path(pen_id: Any) -> str:
    """Database path of a pen variant's quantity."""
    return f"pens/{pen_id}"


def trinket_quantity_path(trinket_id: Any) -> str:
    """Database path of a trinket's quantity."""
    return f"trinkets/{trinket_id}/quantity"


def decrement_quantity(current: Optional[int]) -> int:
    """
    Transaction function: subtract one, treating a missing counter as zero.

    An unseen counter therefore ends at -1 instead of raising.
    """
    return (current or 0) - 1


class FirebaseInventoryStore:
    """
    Inventory counters backed by a Firebase Realtime Database.

    The firebase_admin App is created once per process and reused; creating
    a second store with the same app name attaches to the existing App.
    """

    def __init__(self, firebase_app: firebase_admin.App):
        self._app = firebase_app

    @classmethod
    def from_config(cls, config: Mapping) -> "FirebaseInventoryStore":
        """
        Build the store from FIREBASE_* settings.

        Raises:
            ConfigurationError: If any FIREBASE_* setting is missing
        """
        settings = require_settings(
            config,
            "FIREBASE_PROJECT_ID",
            "FIREBASE_CLIENT_EMAIL",
            "FIREBASE_PRIVATE_KEY",
            "FIREBASE_DATABASE_URL",
        )

        try:
            firebase_app = firebase_admin.get_app(FIREBASE_APP_NAME)
            logger.debug("Reusing existing Firebase app")
        except ValueError:
            certificate = credentials.Certificate(service_account_info(
                client_email=settings["FIREBASE_CLIENT_EMAIL"],
                private_key=settings["FIREBASE_PRIVATE_KEY"],
                project_id=settings["FIREBASE_PROJECT_ID"],
            ))
            firebase_app = firebase_admin.initialize_app(
                certificate,
                {"databaseURL": settings["FIREBASE_DATABASE_URL"]},
                name=FIREBASE_APP_NAME,
            )
            logger.info(f"Firebase initialized for {settings['FIREBASE_DATABASE_URL']}")

        return cls(firebase_app)

    def decrement(self, path: str) -> int:
        """
        Atomically decrement the counter at ``path`` by one.

        Args:
            path: Database path (see pen_path / trinket_quantity_path)

        Returns:
            The counter's new value

        Raises:
            InventoryUpdateError: If the transaction fails or is aborted
        """
        try:
            ref = db.reference(path, app=self._app)
            new_value = ref.transaction(decrement_quantity)
        except Exception as e:
            raise InventoryUpdateError(path, e) from e

        logger.debug(f"Decremented {path} -> {new_value}")
        return new_value

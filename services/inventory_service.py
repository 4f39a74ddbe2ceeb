"""
Inventory decrement service.

Applies one finalized order to the inventory counters: the pen variant and
every attached trinket each lose one unit. Counters are decremented one at a
time in order (pen first, then trinkets as listed). A failure stops the
sequence and leaves earlier decrements in place.
"""

from __future__ import annotations

from typing import Dict

from core.inventory_store import pen_path, trinket_quantity_path
from models.customization import Customization
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class InventoryService:
    """
    Decrements inventory counters for customizations.

    Attributes:
        store: Counter store exposing decrement(path) -> new value
               (FirebaseInventoryStore in production)
    """

    def __init__(self, store):
        self.store = store

    def decrement_for(self, customization: Customization) -> Dict[str, int]:
        """
        Decrement the pen and each trinket by one.

        A trinket listed twice is decremented twice.

        Args:
            customization: Validated customization being finalized

        Returns:
            Mapping of counter path -> new value (last value if repeated)

        Raises:
            InventoryUpdateError: If any counter transaction fails
        """
        new_values = {}

        path = pen_path(customization.pen)
        new_values[path] = self.store.decrement(path)

        for trinket in customization.trinkets:
            path = trinket_quantity_path(trinket.id)
            new_values[path] = self.store.decrement(path)

        logger.info(
            f"Inventory decremented for pen {customization.pen} "
            f"and {len(customization.trinkets)} trinkets"
        )
        return new_values

"""
Data models for the pen inventory backend.

This module contains immutable dataclasses for:
- Customization: Validated pen + trinkets selection
- TrinketRef: A single trinket reference (id + optional display name)
- StagedOrder: Customization held until the payment webhook arrives

All dataclasses are frozen so they can be shared between request threads.
"""

from .customization import Customization, TrinketRef
from .staged_order import StagedOrder

__all__ = [
    "Customization",
    "TrinketRef",
    "StagedOrder",
]

"""
Staged order data model.

A staged order is a customization waiting for payment confirmation.
It is immutable: there is no update path, only stage / take / remove.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

from .customization import Customization


@dataclass(frozen=True)
class StagedOrder:
    """
    A customization held under a tempOrderId until the payment webhook.

    The payload is kept exactly as the client posted it so that
    GET /temp-order/<id> returns an object equal to the input.
    """

    temp_order_id: str
    """Opaque UUID4 identifier handed back to the client."""

    payload: Dict[str, Any]
    """Customization payload as posted (deep copy)."""

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    """When the order was staged (UTC)."""

    @property
    def customization(self) -> Customization:
        """Validated view over the payload."""
        return Customization.from_payload(self.payload)

    def payload_copy(self) -> Dict[str, Any]:
        """Copy of the payload that callers may mutate freely."""
        return deepcopy(self.payload)

    def age_seconds(self, now: datetime = None) -> float:
        now = now or datetime.now(timezone.utc)
        return (now - self.created_at).total_seconds()

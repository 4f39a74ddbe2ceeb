"""
Customization data models.

A customization is what the storefront posts to /temp-save: the pen variant
plus the trinkets attached to it. The raw payload is stored and returned
unchanged; these models are the validated view the services work with.

Trinket references come in two shapes from storefront clients:
    {"id": "T1", "name": "Star"}    - object with optional display name
    "T1"                            - bare identifier
Both normalize to TrinketRef.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from core.exceptions import ValidationError


MISSING_FIELDS_MESSAGE = "Missing pen or trinkets in customization."


def _is_blank(value: Any) -> bool:
    """Absent or falsy, except that an empty list counts as present."""
    if isinstance(value, list):
        return False
    return value is None or not value


@dataclass(frozen=True)
class TrinketRef:
    """A trinket attached to a pen."""

    id: str
    """Trinket identifier, used for the inventory counter path."""

    name: Optional[str] = None
    """Display name, only used in the order log."""

    @property
    def log_label(self) -> str:
        """Name for the order log, falling back to the identifier."""
        return self.name or self.id

    @classmethod
    def from_value(cls, value: Any) -> "TrinketRef":
        """
        Normalize an incoming trinket reference.

        Any present scalar id is accepted, including 0.

        Raises:
            ValidationError: If the id is absent, null or not a scalar
        """
        if isinstance(value, dict):
            trinket_id = value.get("id")
            if trinket_id is None or isinstance(trinket_id, (dict, list)):
                raise ValidationError("Trinket is missing an id.", ["trinkets"])
            name = value.get("name")
            return cls(id=str(trinket_id), name=str(name) if name else None)

        if isinstance(value, int) and not isinstance(value, bool):
            return cls(id=str(value))
        if isinstance(value, str) and value != "":
            return cls(id=str(value))

        raise ValidationError(
            f"Unsupported trinket reference: {value!r}", ["trinkets"]
        )

    @staticmethod
    def label_for(value: Any) -> str:
        """
        Best-effort log label for an unvalidated trinket value.

        Used by the direct log endpoint, which does not validate its payload.
        """
        if isinstance(value, dict):
            label = value.get("name") or value.get("id")
            return "" if label is None else str(label)
        return "" if value is None else str(value)


@dataclass(frozen=True)
class Customization:
    """
    Validated pen customization.

    Lifecycle:
        1. Posted to /temp-save and validated here
        2. Raw payload staged under a tempOrderId
        3. Re-parsed at finalization to drive inventory and logging
    """

    pen: str
    """Pen variant identifier."""

    trinkets: Tuple[TrinketRef, ...] = field(default_factory=tuple)
    """Trinkets in the order the customer attached them. May be empty."""

    @property
    def trinket_labels(self) -> Tuple[str, ...]:
        return tuple(t.log_label for t in self.trinkets)

    @classmethod
    def from_payload(cls, payload: Any) -> "Customization":
        """
        Validate a /temp-save payload.

        pen must be present and non-empty. trinkets must be present and a
        list; an empty list is accepted.

        Args:
            payload: Decoded JSON body

        Returns:
            Customization

        Raises:
            ValidationError: If pen or trinkets is missing or malformed
        """
        if not isinstance(payload, dict):
            raise ValidationError(MISSING_FIELDS_MESSAGE, ["pen", "trinkets"])

        pen = payload.get("pen")
        trinkets = payload.get("trinkets")

        missing = []
        if _is_blank(pen):
            missing.append("pen")
        if _is_blank(trinkets):
            missing.append("trinkets")
        if missing:
            raise ValidationError(MISSING_FIELDS_MESSAGE, missing)

        if isinstance(pen, (dict, list)):
            raise ValidationError("pen must be an identifier.", ["pen"])
        if not isinstance(trinkets, list):
            raise ValidationError("trinkets must be a list.", ["trinkets"])

        return cls(
            pen=str(pen),
            trinkets=tuple(TrinketRef.from_value(t) for t in trinkets),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a normalized dictionary (for logging/diagnostics)."""
        return {
            "pen": self.pen,
            "trinkets": [
                {"id": t.id, "name": t.name} if t.name else {"id": t.id}
                for t in self.trinkets
            ],
        }

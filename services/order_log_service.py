"""
Order log service.

Builds inventory log rows and hands them to the spreadsheet client.

Row format:
    [timestamp, pen, "Trinket A, Trinket B"]

    timestamp - ISO-8601 UTC with milliseconds, e.g. 2025-01-01T12:00:00.000Z
    pen       - pen variant identifier
    trinkets  - display names (identifier when a trinket has no name),
                joined with ", "
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List

from models.customization import Customization, TrinketRef
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

TRINKET_SEPARATOR = ", "


def _cell(value: Any) -> str:
    """Cell text for a value, written verbatim; None becomes an empty cell."""
    return "" if value is None else str(value)


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as UTC ISO-8601 with milliseconds and a Z suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class OrderLogService:
    """
    Appends finalized orders to the order log.

    Attributes:
        order_log: Row appender exposing append_row(values)
                   (GoogleSheetsOrderLog in production)
    """

    def __init__(self, order_log, clock: Callable[[], datetime] = None):
        """
        Args:
            order_log: Spreadsheet client
            clock: Returns the current time (for tests)
        """
        self.order_log = order_log
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def build_row(self, pen: Any, labels: Iterable[Any]) -> List[str]:
        """Build one log row from a pen id and trinket labels."""
        joined = TRINKET_SEPARATOR.join(_cell(label) for label in labels)
        return [format_timestamp(self._clock()), _cell(pen), joined]

    def log_customization(self, customization: Customization) -> List[str]:
        """
        Log a validated customization (finalization path).

        Returns:
            The row that was appended

        Raises:
            OrderLogError: If the spreadsheet append fails
        """
        row = self.build_row(customization.pen, customization.trinket_labels)
        self.order_log.append_row(row)
        logger.info(f"Logged order for pen {customization.pen}")
        return row

    def log_order(self, pen: Any, trinkets: Any) -> List[str]:
        """
        Log an unvalidated {pen, trinkets} payload (direct /log path).

        trinkets is only iterated: None or a non-iterable value raises
        TypeError.

        Returns:
            The row that was appended

        Raises:
            TypeError: If trinkets is not iterable
            OrderLogError: If the spreadsheet append fails
        """
        labels = [TrinketRef.label_for(t) for t in trinkets]
        row = self.build_row(pen, labels)
        self.order_log.append_row(row)
        logger.info(f"Logged order for pen {pen} (direct)")
        return row

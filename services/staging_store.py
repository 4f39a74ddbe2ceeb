"""
In-memory staging store for customizations awaiting payment.

Holds StagedOrders keyed by tempOrderId for the lifetime of the process.
Nothing is persisted: a restart forgets every staged order.

Thread Safety:
    - Flask serves requests on multiple threads
    - Every operation holds a threading.Lock
    - take() removes and returns in one locked step, so two webhooks for the
      same tempOrderId cannot both finalize it

Expiry:
    Disabled by default (staged orders live until finalized or restart).
    With max_age_seconds set:
    - get/take/contains check the age of the one entry they touch, so an
      expired order is never returned
    - a full sweep of the map runs at most once per purge_interval_seconds
      (default: max_age_seconds), keeping routine requests O(1)
    - len() and purge_expired() always sweep, so counts are exact
    There is no background thread.

Usage:
    store = StagingStore()
    temp_order_id = store.stage({"pen": "P1", "trinkets": []})
    payload = store.get(temp_order_id)

    # Finalization
    staged = store.take(temp_order_id)
    try:
        ...
    except Exception:
        store.restore(staged)
        raise
"""

from __future__ import annotations

import threading
import uuid
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from core.exceptions import TempOrderNotFoundError
from models.customization import Customization
from models.staged_order import StagedOrder
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class StagingStore:
    """
    Thread-safe map of tempOrderId -> StagedOrder.

    Injected into the app via app.config["STAGING_STORE"] so tests and
    alternative backends can swap it.
    """

    def __init__(
        self,
        max_age_seconds: Optional[float] = None,
        id_factory: Callable[[], str] = None,
        clock: Callable[[], datetime] = None,
        purge_interval_seconds: Optional[float] = None
    ):
        """
        Initialize an empty store.

        Args:
            max_age_seconds: Expire staged orders older than this (None = never)
            id_factory: Generates tempOrderIds (default: uuid4 strings)
            clock: Returns the current UTC time (for tests)
            purge_interval_seconds: Minimum time between full expiry sweeps
                                    (default: max_age_seconds)
        """
        self._orders: Dict[str, StagedOrder] = {}
        self._lock = threading.Lock()
        self._max_age = max_age_seconds
        self._purge_interval = (
            purge_interval_seconds if purge_interval_seconds is not None else max_age_seconds
        )
        self._last_purge: Optional[datetime] = None
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def max_age_seconds(self) -> Optional[float]:
        return self._max_age

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired_locked(force=True)
            return len(self._orders)

    def __contains__(self, temp_order_id: str) -> bool:
        with self._lock:
            self._purge_expired_locked()
            return self._lookup_locked(temp_order_id) is not None

    def stage(self, payload: Any) -> str:
        """
        Validate and stage a customization.

        Args:
            payload: Decoded /temp-save body

        Returns:
            New tempOrderId

        Raises:
            ValidationError: If pen or trinkets is missing (nothing is stored)
        """
        Customization.from_payload(payload)

        staged_payload = deepcopy(payload)
        with self._lock:
            self._purge_expired_locked()

            temp_order_id = self._id_factory()
            while temp_order_id in self._orders:
                temp_order_id = self._id_factory()

            self._orders[temp_order_id] = StagedOrder(
                temp_order_id=temp_order_id,
                payload=staged_payload,
                created_at=self._clock(),
            )

        logger.info(f"Saved customization for tempOrderId: {temp_order_id}")
        return temp_order_id

    def get(self, temp_order_id: str) -> Dict[str, Any]:
        """
        Look up a staged customization without removing it.

        Returns:
            Copy of the payload exactly as it was staged

        Raises:
            TempOrderNotFoundError: If the id is unknown, finalized or expired
        """
        with self._lock:
            self._purge_expired_locked()
            staged = self._lookup_locked(temp_order_id)

        if staged is None:
            raise TempOrderNotFoundError(temp_order_id)
        return staged.payload_copy()

    def remove(self, temp_order_id: str) -> bool:
        """
        Delete a staged order. Removing an unknown id is a no-op.

        Returns:
            True if an entry was removed
        """
        with self._lock:
            removed = self._orders.pop(temp_order_id, None) is not None

        if removed:
            logger.debug(f"Removed tempOrderId: {temp_order_id}")
        return removed

    def take(self, temp_order_id: str) -> StagedOrder:
        """
        Remove and return a staged order in one atomic step.

        Only one caller can take a given id; every other concurrent caller
        gets TempOrderNotFoundError.

        Raises:
            TempOrderNotFoundError: If the id is unknown, finalized or expired
        """
        with self._lock:
            self._purge_expired_locked()
            staged = self._lookup_locked(temp_order_id)
            if staged is not None:
                del self._orders[temp_order_id]

        if staged is None:
            raise TempOrderNotFoundError(temp_order_id)
        logger.debug(f"Took tempOrderId for finalization: {temp_order_id}")
        return staged

    def restore(self, staged: StagedOrder) -> None:
        """
        Put back an order previously returned by take().

        Keeps the original created_at so expiry is unaffected.
        """
        with self._lock:
            self._orders.setdefault(staged.temp_order_id, staged)
        logger.debug(f"Restored tempOrderId: {staged.temp_order_id}")

    def purge_expired(self) -> int:
        """
        Drop staged orders older than max_age_seconds.

        Returns:
            Number of orders removed (always 0 when expiry is disabled)
        """
        with self._lock:
            return self._purge_expired_locked(force=True)

    def clear(self) -> int:
        """
        Remove all staged orders.

        Returns:
            Number of orders removed
        """
        with self._lock:
            count = len(self._orders)
            self._orders.clear()
        logger.info(f"Cleared {count} staged orders")
        return count

    def _is_expired(self, staged: StagedOrder, now: datetime) -> bool:
        return self._max_age is not None and staged.age_seconds(now) > self._max_age

    def _lookup_locked(self, temp_order_id: str) -> Optional[StagedOrder]:
        """Return a live entry, dropping it first if it has expired."""
        staged = self._orders.get(temp_order_id)
        if staged is not None and self._is_expired(staged, self._clock()):
            del self._orders[temp_order_id]
            logger.info(f"Expired tempOrderId: {temp_order_id}")
            return None
        return staged

    def _purge_expired_locked(self, force: bool = False) -> int:
        if self._max_age is None:
            return 0

        now = self._clock()
        if (
            not force
            and self._last_purge is not None
            and (now - self._last_purge).total_seconds() < self._purge_interval
        ):
            return 0
        self._last_purge = now

        expired = [
            temp_order_id
            for temp_order_id, staged in self._orders.items()
            if self._is_expired(staged, now)
        ]
        for temp_order_id in expired:
            del self._orders[temp_order_id]

        if expired:
            logger.info(f"Expired {len(expired)} staged orders")
        return len(expired)

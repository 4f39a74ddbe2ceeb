"""
In-memory stand-ins for Firebase and Google Sheets.

They follow the same contracts as the real clients: decrement(path) treats
a missing counter as zero, and append_row(values) records the row.
"""

import threading

from core.exceptions import InventoryUpdateError, OrderLogError
from core.inventory_store import decrement_quantity


class FakeInventoryStore:
    """Counter store with Firebase transaction semantics."""

    def __init__(self, counters=None, fail_on=None):
        self.counters = dict(counters or {})
        self.calls = []
        self.fail_on = fail_on
        self._lock = threading.Lock()

    def decrement(self, path):
        if path == self.fail_on:
            raise InventoryUpdateError(path, RuntimeError("transaction aborted"))
        with self._lock:
            self.calls.append(path)
            self.counters[path] = decrement_quantity(self.counters.get(path))
            return self.counters[path]


class RecordingOrderLog:
    """Spreadsheet stand-in that records appended rows."""

    def __init__(self, fail=False):
        self.rows = []
        self.fail = fail
        self._lock = threading.Lock()

    def append_row(self, values):
        if self.fail:
            raise OrderLogError("Failed to append order log row: quota exceeded")
        with self._lock:
            self.rows.append(list(values))
        return {"updates": {"updatedRange": "InventoryLog!A2:C2"}}

"""
Shared fixtures for the pen inventory backend tests.

Firebase and Google Sheets are replaced with the fakes in fakes.py.
"""

from datetime import datetime, timezone

import pytest

from app import create_app
from config import TestingConfig
from fakes import FakeInventoryStore, RecordingOrderLog
from services.inventory_service import InventoryService
from services.order_finalizer import OrderFinalizer
from services.order_log_service import OrderLogService
from services.staging_store import StagingStore


FIXED_NOW = datetime(2025, 3, 14, 15, 9, 26, 535000, tzinfo=timezone.utc)


# Fixtures

@pytest.fixture
def inventory_store():
    """Inventory with a few stocked counters."""
    return FakeInventoryStore({
        "pens/P1": 10,
        "trinkets/T1/quantity": 5,
        "trinkets/T2/quantity": 3,
    })


@pytest.fixture
def order_log():
    return RecordingOrderLog()


@pytest.fixture
def staging_store():
    return StagingStore()


@pytest.fixture
def order_log_service(order_log):
    return OrderLogService(order_log, clock=lambda: FIXED_NOW)


@pytest.fixture
def finalizer(staging_store, inventory_store, order_log_service):
    return OrderFinalizer(staging_store, InventoryService(inventory_store), order_log_service)


@pytest.fixture
def sample_customization():
    return {"pen": "P1", "trinkets": [{"id": "T1", "name": "Star"}]}


@pytest.fixture
def app(inventory_store, order_log, staging_store):
    """Flask app wired to the fakes."""
    return create_app(
        TestingConfig,
        inventory_store=inventory_store,
        order_log=order_log,
        staging_store=staging_store,
    )


@pytest.fixture
def client(app):
    return app.test_client()

# tests/conftest.py
# ---------------------------------------------------------------------
# Ground rules:
# - pytest-qt owns QApplication (use qapp/qtbot fixtures)
# - Every test gets its own SQLite file under tmp_path
# - Seed data is served by the storage repo on first load
# - Clock and "today" are pinned so dates are deterministic
# ---------------------------------------------------------------------

from __future__ import annotations

import os
from datetime import datetime

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from retail_dashboard.database import get_connection
from retail_dashboard.database.repositories.storage_repo import StorageRepo
from retail_dashboard.services import AppServices
from retail_dashboard.services.insights import NullInsights
from retail_dashboard.services.inventory_service import InventoryService
from retail_dashboard.services.sales_service import SalesService
from retail_dashboard.services.store import ShopStore

TODAY = "2024-05-01"
NOW = datetime(2024, 5, 2, 10, 30, 0)


@pytest.fixture
def conn(tmp_path):
    c = get_connection(tmp_path / "retail.db")
    yield c
    c.close()


@pytest.fixture
def storage(conn):
    return StorageRepo(conn)


@pytest.fixture
def store(storage):
    return ShopStore(storage)


@pytest.fixture
def empty_store(conn):
    return ShopStore(StorageRepo(conn, seeds=None))


@pytest.fixture
def inventory(store):
    return InventoryService(store, today=lambda: TODAY)


@pytest.fixture
def sales(store):
    return SalesService(store, clock=lambda: NOW)


@pytest.fixture
def services(store, inventory, sales):
    return AppServices(store=store, inventory=inventory, sales=sales, insights=NullInsights())


@pytest.fixture
def product_data():
    return {
        "name": "Desk Lamp",
        "category": "Office",
        "cost_price": 12.0,
        "suggested_price": 30.0,
        "current_stock": 10,
        "min_stock": 2,
    }

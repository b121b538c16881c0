# retail_dashboard/services/__init__.py
"""
Domain services (no Qt): the store, inventory, sales, reporting and insights.

    services = build_services(conn, config)
    services.sales.record_sale(pid, "Ana", 2, 25.0)
"""
from __future__ import annotations

import sqlite3
from dataclasses import dataclass

from .errors import DomainError, InsufficientStock, NotFound, ValidationError
from .insights import InsightsProvider, NullInsights, make_provider
from .inventory_service import InventoryService
from .sales_service import SalesService
from .store import ShopStore


@dataclass
class AppServices:
    store: ShopStore
    inventory: InventoryService
    sales: SalesService
    insights: InsightsProvider


def build_services(conn: sqlite3.Connection, config=None) -> AppServices:
    store = ShopStore.from_connection(conn)
    return AppServices(
        store=store,
        inventory=InventoryService(store),
        sales=SalesService(store),
        insights=make_provider(config) if config is not None else NullInsights(),
    )


__all__ = [
    "AppServices",
    "build_services",
    "ShopStore",
    "InventoryService",
    "SalesService",
    "InsightsProvider",
    "DomainError",
    "ValidationError",
    "InsufficientStock",
    "NotFound",
]

# retail_dashboard/database/seeders/default_data.py
"""
Sample data served on first run, before a collection has ever been saved.

Rows use the storage layout (plain dicts with the dataclass field names).
"""
from __future__ import annotations

from datetime import datetime, timedelta

from ...constants import KEY_PRODUCTS, KEY_SALES


def initial_products() -> list[dict]:
    return [
        {
            "product_id": "1",
            "name": "Bluetooth Headphones",
            "category": "Electronics",
            "cost_price": 45.00,
            "suggested_price": 120.00,
            "current_stock": 15,
            "min_stock": 5,
            "total_sold": 12,
            "last_restock_date": "2023-10-01",
        },
        {
            "product_id": "2",
            "name": "Reinforced USB-C Cable",
            "category": "Accessories",
            "cost_price": 8.50,
            "suggested_price": 25.00,
            "current_stock": 4,
            "min_stock": 10,
            "total_sold": 45,
            "last_restock_date": "2023-10-15",
        },
        {
            "product_id": "3",
            "name": "Laptop Stand",
            "category": "Office",
            "cost_price": 35.00,
            "suggested_price": 89.90,
            "current_stock": 8,
            "min_stock": 3,
            "total_sold": 5,
            "last_restock_date": "2023-09-20",
        },
    ]


def initial_sales(now: datetime | None = None) -> list[dict]:
    """Two sales, dated two days and one day before `now`."""
    now = now or datetime.now()
    return [
        {
            "sale_id": "101",
            "date": (now - timedelta(days=2)).isoformat(timespec="seconds"),
            "customer_name": "John Smith",
            "product_id": "1",
            "product_name": "Bluetooth Headphones",
            "quantity": 1,
            "cost_at_sale": 45.00,
            "sale_price": 120.00,
            "total_value": 120.00,
            "profit": 75.00,
        },
        {
            "sale_id": "102",
            "date": (now - timedelta(days=1)).isoformat(timespec="seconds"),
            "customer_name": "Mary Oliver",
            "product_id": "2",
            "product_name": "Reinforced USB-C Cable",
            "quantity": 2,
            "cost_at_sale": 8.50,
            "sale_price": 25.00,
            "total_value": 50.00,
            "profit": 33.00,
        },
    ]


def seed_for(key: str) -> list[dict]:
    if key == KEY_PRODUCTS:
        return initial_products()
    if key == KEY_SALES:
        return initial_sales()
    return []

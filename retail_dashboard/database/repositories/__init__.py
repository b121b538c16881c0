# retail_dashboard/database/repositories/__init__.py
"""
Repository layer public API.

Usage:
    from retail_dashboard.database.repositories import (
        StorageRepo, StorageKind,
        ProductsRepo, Product,
        SalesRepo, Sale,
    )
"""

# ---------------- Key/value storage ----------------
from .storage_repo import StorageRepo, StorageKind

# ---------------- Products -----------------
from .products_repo import ProductsRepo, Product

# ------------------ Sales ------------------
from .sales_repo import SalesRepo, Sale, parse_sale_date

__all__ = [
    "StorageRepo",
    "StorageKind",
    "ProductsRepo",
    "Product",
    "SalesRepo",
    "Sale",
    "parse_sale_date",
]

# retail_dashboard/services/inventory_service.py
from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Callable, List, Mapping

from ..database.repositories.products_repo import Product
from ..utils.helpers import new_id, today_str
from ..utils.validators import non_empty, try_parse_float, try_parse_int
from .errors import NotFound, ValidationError
from .store import ShopStore

_log = logging.getLogger(__name__)


def weighted_average_cost(
    current_stock: int, current_cost: float, added_quantity: int, unit_cost: float
) -> float:
    """
    Blend the old unit cost with the shipment cost, weighted by quantity.
    Leaves the cost unchanged when the resulting stock would be 0.
    """
    total = current_stock + added_quantity
    if total == 0:
        return current_cost
    blended = (current_stock * current_cost + added_quantity * unit_cost) / total
    return round(blended, 2)


def require_number(value, label: str, *, minimum: float = 0.0) -> float:
    ok, v = try_parse_float(value)
    if not ok or v is None or math.isnan(v) or math.isinf(v):
        raise ValidationError(f"{label} must be a number.")
    if v < minimum:
        raise ValidationError(f"{label} cannot be less than {minimum:g}.")
    return v


def require_int(value, label: str, *, minimum: int = 0) -> int:
    ok, v = try_parse_int(value)
    if not ok or v is None:
        raise ValidationError(f"{label} must be a whole number.")
    if v < minimum:
        raise ValidationError(f"{label} cannot be less than {minimum}.")
    return v


class InventoryService:
    """Product CRUD and restocking on top of the store."""

    def __init__(self, store: ShopStore, today: Callable[[], str] = today_str):
        self.store = store
        self._today = today

    # ---------------------------- Reads ----------------------------

    def list_products(self) -> List[Product]:
        return self.store.products

    def get_product(self, product_id: str) -> Product:
        p = self.store.get_product(product_id)
        if p is None:
            raise NotFound(product_id)
        return p

    def low_stock(self) -> List[Product]:
        return [p for p in self.store.products if p.is_low_stock]

    # ---------------------------- Mutations ----------------------------

    def add_product(self, data: Mapping) -> Product:
        """
        Create a product from every field except the id. Missing total_sold
        defaults to 0, missing last_restock_date to today.
        """
        product = self._validated(
            Product(
                product_id=new_id(),
                name=data.get("name", ""),
                category=data.get("category", "") or "",
                cost_price=data.get("cost_price"),
                suggested_price=data.get("suggested_price"),
                current_stock=data.get("current_stock"),
                min_stock=data.get("min_stock"),
                total_sold=data.get("total_sold", 0) or 0,
                last_restock_date=data.get("last_restock_date") or self._today(),
            )
        )
        self.store.add_product(product)
        _log.info("Product %s created (%s)", product.product_id, product.name)
        return product

    def update_product(self, product: Product) -> Product:
        """Full overwrite of the stored record with the same id."""
        product = self._validated(replace(product))
        if not self.store.replace_product(product):
            raise NotFound(product.product_id)
        _log.info("Product %s updated", product.product_id)
        return product

    def delete_product(self, product_id: str) -> None:
        """
        Remove the product. Sales referencing it are left untouched: they carry
        their own product name and cost snapshots.
        """
        if not self.store.remove_product(product_id):
            raise NotFound(product_id)
        _log.info("Product %s deleted", product_id)

    def restock(self, product_id: str, added_quantity, unit_cost) -> Product:
        """
        Add `added_quantity` units bought at `unit_cost` each and recompute the
        product cost as the weighted average of old stock and the shipment.
        """
        qty = require_int(added_quantity, "Quantity", minimum=1)
        cost = require_number(unit_cost, "Unit cost")
        current = self.get_product(product_id)

        new_cost = weighted_average_cost(current.current_stock, current.cost_price, qty, cost)
        updated = replace(
            current,
            current_stock=current.current_stock + qty,
            cost_price=new_cost,
            last_restock_date=self._today(),
        )
        self.store.replace_product(updated)
        _log.info(
            "Restocked %s: +%d @ %.2f, stock %d -> %d, cost %.2f -> %.2f",
            product_id, qty, cost, current.current_stock, updated.current_stock,
            current.cost_price, new_cost,
        )
        return updated

    # ---------------------------- Validation ----------------------------

    @staticmethod
    def _validated(p: Product) -> Product:
        if not non_empty(p.name):
            raise ValidationError("Name cannot be empty.")
        return replace(
            p,
            name=str(p.name).strip(),
            category=str(p.category or "").strip(),
            cost_price=require_number(p.cost_price, "Cost price"),
            suggested_price=require_number(p.suggested_price, "Suggested price"),
            current_stock=require_int(p.current_stock, "Current stock"),
            min_stock=require_int(p.min_stock, "Minimum stock"),
            total_sold=require_int(p.total_sold, "Total sold"),
        )

# retail_dashboard/services/sales_service.py
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time
from typing import Callable, Iterable, List, Union

from ..database.repositories.products_repo import Product
from ..database.repositories.sales_repo import Sale, parse_sale_date
from ..utils.helpers import new_id
from ..utils.validators import non_empty
from .errors import InsufficientStock, NotFound, ValidationError
from .inventory_service import require_int, require_number
from .store import ShopStore

_log = logging.getLogger(__name__)

SaleDate = Union[date, datetime, str, None]


def projected_profit(product: Product, quantity: int, price: float) -> float:
    """Profit a sale would make at the product's current cost."""
    return (price - product.cost_price) * quantity


def max_price_sold(sales: Iterable[Sale], product_id: str) -> float:
    """Highest unit price ever charged for the product; 0 if never sold."""
    return max((s.sale_price for s in sales if s.product_id == product_id), default=0.0)


class SalesService:
    def __init__(self, store: ShopStore, clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self._clock = clock

    def list_sales(self) -> List[Sale]:
        return self.store.sales

    def record_sale(
        self,
        product_id: str,
        customer_name: str,
        quantity,
        unit_sale_price,
        sale_date: SaleDate = None,
    ) -> Sale:
        """
        Sell `quantity` units of a product. The sale is appended and the
        product's stock/total_sold are adjusted in the same store mutation.

        Raises NotFound, ValidationError or InsufficientStock; in every case
        nothing is changed.
        """
        product = self.store.get_product(product_id)
        if product is None:
            raise NotFound(product_id)

        if not non_empty(customer_name):
            raise ValidationError("Customer name cannot be empty.")
        qty = require_int(quantity, "Quantity", minimum=1)
        price = require_number(unit_sale_price, "Sale price")
        when = self._normalize_date(sale_date)

        if qty > product.current_stock:
            raise InsufficientStock(product.name, product.current_stock, qty)

        cost = product.cost_price
        sale = Sale(
            sale_id=new_id(),
            date=when,
            customer_name=str(customer_name).strip(),
            product_id=product.product_id,
            product_name=product.name,
            quantity=qty,
            cost_at_sale=cost,
            sale_price=price,
            total_value=qty * price,
            profit=(price - cost) * qty,
        )
        updated = replace(
            product,
            current_stock=product.current_stock - qty,
            total_sold=product.total_sold + qty,
        )
        self.store.apply_sale(sale, updated)
        _log.info(
            "Sale %s: %d x %s to %s @ %.2f (profit %.2f)",
            sale.sale_id, qty, product.name, sale.customer_name, price, sale.profit,
        )
        return sale

    def _normalize_date(self, value: SaleDate) -> str:
        """
        None -> now; a bare date -> midnight of that day; datetimes and ISO
        strings are kept (aware values converted to local time).
        """
        if value is None or value == "":
            dt = self._clock()
        elif isinstance(value, datetime):
            dt = parse_sale_date(value.isoformat())
        elif isinstance(value, date):
            dt = datetime.combine(value, time())
        else:
            try:
                dt = parse_sale_date(str(value))
            except ValueError as exc:
                raise ValidationError(f"Invalid sale date: {value!r}.") from exc
        return dt.isoformat(timespec="seconds")

# retail_dashboard/database/repositories/sales_repo.py
from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from datetime import datetime
from typing import Dict, List

from .storage_repo import StorageRepo, StorageKind


@dataclass(frozen=True)
class Sale:
    """
    One sales transaction. Immutable once recorded.

    cost_at_sale is the product's unit cost when the sale happened, so profit
    stays fixed even if the product is restocked at a different cost later.
    product_name is a snapshot for the same reason (the product may be deleted).
    """
    sale_id: str
    date: str            # ISO timestamp
    customer_name: str
    product_id: str
    product_name: str
    quantity: int
    cost_at_sale: float
    sale_price: float
    total_value: float   # quantity * sale_price
    profit: float        # (sale_price - cost_at_sale) * quantity

    @property
    def timestamp(self) -> datetime:
        return parse_sale_date(self.date)

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict) -> "Sale":
        known = {f.name for f in fields(cls)}
        r = {k: v for k, v in d.items() if k in known}
        return cls(
            sale_id=str(r["sale_id"]),
            date=str(r["date"]),
            customer_name=str(r.get("customer_name") or ""),
            product_id=str(r.get("product_id") or ""),
            product_name=str(r.get("product_name") or ""),
            quantity=int(r.get("quantity") or 0),
            cost_at_sale=float(r.get("cost_at_sale") or 0.0),
            sale_price=float(r.get("sale_price") or 0.0),
            total_value=float(r.get("total_value") or 0.0),
            profit=float(r.get("profit") or 0.0),
        )


def parse_sale_date(value: str) -> datetime:
    """
    Parse a stored sale timestamp. Accepts ISO dates/datetimes, including a
    trailing 'Z'. Aware values are converted to local time and made naive so
    they compare with naive ones.
    """
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


class SalesRepo:
    def __init__(self, storage: StorageRepo):
        self.storage = storage

    def load_all(self) -> List[Sale]:
        return [Sale.from_dict(r) for r in self.storage.load(StorageKind.SALES)]

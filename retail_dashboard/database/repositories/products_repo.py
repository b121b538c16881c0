# retail_dashboard/database/repositories/products_repo.py
from dataclasses import dataclass, asdict, fields
from typing import Dict, List

from ...constants import MIN_MARGIN_FACTOR
from .storage_repo import StorageRepo, StorageKind


@dataclass
class Product:
    product_id: str
    name: str
    category: str
    cost_price: float
    suggested_price: float
    current_stock: int
    min_stock: int
    total_sold: int = 0
    last_restock_date: str = ""  # ISO YYYY-MM-DD

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.min_stock

    @property
    def min_margin_price(self) -> float:
        """Informative minimum resale price (20% over cost); never enforced."""
        return self.cost_price * MIN_MARGIN_FACTOR

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict) -> "Product":
        known = {f.name for f in fields(cls)}
        p = cls(**{k: v for k, v in d.items() if k in known})
        p.product_id = str(p.product_id)
        p.cost_price = float(p.cost_price or 0.0)
        p.suggested_price = float(p.suggested_price or 0.0)
        p.current_stock = int(p.current_stock or 0)
        p.min_stock = int(p.min_stock or 0)
        p.total_sold = int(p.total_sold or 0)
        p.last_restock_date = str(p.last_restock_date or "")
        return p


class ProductsRepo:
    def __init__(self, storage: StorageRepo):
        self.storage = storage

    def load_all(self) -> List[Product]:
        return [Product.from_dict(r) for r in self.storage.load(StorageKind.PRODUCTS)]

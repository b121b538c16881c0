# retail_dashboard/services/store.py
from __future__ import annotations

"""
In-memory owner of the Products and Sales collections.

Every mutation method updates the collections and writes them to storage as
one unit. If the write fails, the in-memory state stays authoritative for the
session: the failure is logged and handed to the persistence-error handler
(the main window shows it in the status bar). Nothing is retried.
"""

import logging
import sqlite3
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional

from ..database.repositories.products_repo import Product, ProductsRepo
from ..database.repositories.sales_repo import Sale, SalesRepo
from ..database.repositories.storage_repo import StorageKind, StorageRepo

_log = logging.getLogger(__name__)


class ShopStore:
    def __init__(self, storage: StorageRepo):
        self.storage = storage
        self.products_repo = ProductsRepo(storage)
        self.sales_repo = SalesRepo(storage)
        self._products: List[Product] = []
        self._sales: List[Sale] = []
        self._listeners: List[Callable[[], None]] = []
        self._persist_error_handler: Optional[Callable[[str], None]] = None
        self.last_persist_error: Optional[str] = None
        self.reload()

    @classmethod
    def from_connection(cls, conn: sqlite3.Connection) -> "ShopStore":
        return cls(StorageRepo(conn))

    # ---------------------------- Reads ----------------------------

    @property
    def products(self) -> List[Product]:
        """Copies, so callers can't mutate stored records behind our back."""
        return [replace(p) for p in self._products]

    @property
    def sales(self) -> List[Sale]:
        return list(self._sales)

    def get_product(self, product_id: str) -> Optional[Product]:
        for p in self._products:
            if p.product_id == product_id:
                return replace(p)
        return None

    def reload(self) -> None:
        """
        Load both collections. If either one came from seed data, both are
        written back at once so seeded sales keep their dates on later runs.
        """
        seeded = not (
            self.storage.has(StorageKind.PRODUCTS) and self.storage.has(StorageKind.SALES)
        )
        self._products = self.products_repo.load_all()
        self._sales = self.sales_repo.load_all()
        _log.debug("Loaded %d products, %d sales", len(self._products), len(self._sales))
        if seeded:
            _log.info("Saving initial collections")
            self._persist({
                StorageKind.PRODUCTS: [p.to_dict() for p in self._products],
                StorageKind.SALES: [s.to_dict() for s in self._sales],
            })

    # ---------------------------- Listeners ----------------------------

    def add_listener(self, fn: Callable[[], None]) -> None:
        """fn() is called after every mutation."""
        self._listeners.append(fn)

    def set_persist_error_handler(self, fn: Optional[Callable[[str], None]]) -> None:
        self._persist_error_handler = fn

    # ---------------------------- Mutations ----------------------------

    def add_product(self, product: Product) -> None:
        self._products = self._products + [replace(product)]
        self._commit(products=True)

    def replace_product(self, product: Product) -> bool:
        """Full overwrite of the record with the same id. False if no record matches."""
        idx = self._index_of(product.product_id)
        if idx is None:
            return False
        products = list(self._products)
        products[idx] = replace(product)
        self._products = products
        self._commit(products=True)
        return True

    def remove_product(self, product_id: str) -> bool:
        idx = self._index_of(product_id)
        if idx is None:
            return False
        self._products = self._products[:idx] + self._products[idx + 1:]
        self._commit(products=True)
        return True

    def apply_sale(self, sale: Sale, product: Product) -> None:
        """
        Append `sale` and overwrite `product` (its stock/total_sold already
        adjusted) together; both collections are written in one transaction.
        """
        idx = self._index_of(product.product_id)
        if idx is None:
            raise KeyError(product.product_id)
        products = list(self._products)
        products[idx] = replace(product)
        self._products, self._sales = products, self._sales + [sale]
        self._commit(products=True, sales=True)

    # ---------------------------- Internals ----------------------------

    def _index_of(self, product_id: str) -> Optional[int]:
        for i, p in enumerate(self._products):
            if p.product_id == product_id:
                return i
        return None

    def _commit(self, *, products: bool = False, sales: bool = False) -> None:
        collections: Dict[StorageKind, Iterable[Dict]] = {}
        if products:
            collections[StorageKind.PRODUCTS] = [p.to_dict() for p in self._products]
        if sales:
            collections[StorageKind.SALES] = [s.to_dict() for s in self._sales]
        self._persist(collections)
        for fn in list(self._listeners):
            fn()

    def _persist(self, collections: Dict[StorageKind, Iterable[Dict]]) -> None:
        try:
            self.storage.save_many(collections)
            self.last_persist_error = None
        except sqlite3.Error as exc:
            kinds = ", ".join(k.value for k in collections)
            msg = f"Could not save {kinds}: {exc}. Changes are kept for this session only."
            _log.warning("Persistence write failed (%s)", kinds, exc_info=True)
            self.last_persist_error = msg
            if self._persist_error_handler is not None:
                self._persist_error_handler(msg)

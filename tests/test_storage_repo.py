# tests/test_storage_repo.py
import sqlite3
from datetime import datetime

import pytest

from retail_dashboard.database.repositories import (
    ProductsRepo, SalesRepo, StorageKind, StorageRepo,
)
from retail_dashboard.constants import KEY_SALES
from retail_dashboard.database.seeders.default_data import initial_products, initial_sales
from retail_dashboard.services.inventory_service import InventoryService
from retail_dashboard.services.store import ShopStore


def test_first_load_serves_seed_data(storage):
    products = ProductsRepo(storage).load_all()
    sales = SalesRepo(storage).load_all()
    assert [p.product_id for p in products] == ["1", "2", "3"]
    assert [s.sale_id for s in sales] == ["101", "102"]
    # seeds are not written until something is saved
    assert not storage.has(StorageKind.PRODUCTS)
    assert not storage.has(StorageKind.SALES)


def test_seeds_disabled_gives_empty_collections(conn):
    repo = StorageRepo(conn, seeds=None)
    assert repo.load(StorageKind.PRODUCTS) == []
    assert repo.load("sales") == []


def test_save_then_load_replaces_seed(storage):
    storage.save(StorageKind.PRODUCTS, [{"product_id": "x", "name": "Only"}])
    assert storage.has(StorageKind.PRODUCTS)
    assert storage.load(StorageKind.PRODUCTS) == [{"product_id": "x", "name": "Only"}]
    # untouched collection still comes from seeds
    assert len(storage.load(StorageKind.SALES)) == 2


def test_saving_empty_list_is_not_reseeded(storage):
    storage.save(StorageKind.SALES, [])
    assert storage.load(StorageKind.SALES) == []


def test_products_round_trip_keeps_types(storage):
    repo = ProductsRepo(storage)
    products = repo.load_all()
    products[0].current_stock = 99
    storage.save(StorageKind.PRODUCTS, [p.to_dict() for p in products])
    again = ProductsRepo(StorageRepo(storage.conn)).load_all()
    assert again[0].current_stock == 99
    assert isinstance(again[0].cost_price, float)
    assert again[1].name == "Reinforced USB-C Cable"


def test_save_many_is_all_or_nothing(conn):
    repo = StorageRepo(conn, seeds=None)
    conn.execute(
        """
        CREATE TRIGGER fail_sales BEFORE INSERT ON kv_store
        WHEN NEW.key = 'sales'
        BEGIN SELECT RAISE(ABORT, 'sales write refused'); END;
        """
    )
    conn.commit()
    with pytest.raises(sqlite3.Error):
        repo.save_many({
            StorageKind.PRODUCTS: [{"product_id": "p1"}],
            StorageKind.SALES: [{"sale_id": "s1"}],
        })
    assert not repo.has(StorageKind.PRODUCTS)
    assert not repo.has(StorageKind.SALES)


def test_non_array_value_is_rejected(conn):
    conn.execute("INSERT INTO kv_store(key, value) VALUES ('products', '{\"a\": 1}')")
    conn.commit()
    with pytest.raises(ValueError):
        StorageRepo(conn).load(StorageKind.PRODUCTS)


def test_unknown_kind_is_rejected(storage):
    with pytest.raises(ValueError):
        storage.load("customers")


# ---------------------------- seeded first run ----------------------------

def _seeds_at(now):
    def seeds(key):
        if key == KEY_SALES:
            return initial_sales(now)
        return initial_products()
    return seeds


def test_store_saves_seed_collections_on_first_load(conn):
    ShopStore(StorageRepo(conn, seeds=_seeds_at(datetime(2024, 5, 10, 9, 0))))
    fresh = StorageRepo(conn, seeds=None)
    assert fresh.has(StorageKind.PRODUCTS)
    assert fresh.has(StorageKind.SALES)
    assert [s.sale_id for s in SalesRepo(fresh).load_all()] == ["101", "102"]


def test_seeded_sale_dates_survive_restart(conn):
    first = ShopStore(StorageRepo(conn, seeds=_seeds_at(datetime(2024, 5, 10, 9, 0))))
    InventoryService(first).add_product({
        "name": "Pen", "category": "Office", "cost_price": 1, "suggested_price": 2,
        "current_stock": 5, "min_stock": 1,
    })
    dates = [s.date for s in first.sales]

    later = ShopStore(StorageRepo(conn, seeds=_seeds_at(datetime(2024, 5, 14, 9, 0))))
    assert [s.date for s in later.sales] == dates
    assert dates == ["2024-05-08T09:00:00", "2024-05-09T09:00:00"]
    assert len(later.products) == 4


def test_stored_collections_are_not_rewritten_on_load(conn):
    storage = StorageRepo(conn, seeds=None)
    storage.save_many({StorageKind.PRODUCTS: [], StorageKind.SALES: []})
    ShopStore(StorageRepo(conn))
    assert storage.load(StorageKind.PRODUCTS) == []
    assert storage.load(StorageKind.SALES) == []

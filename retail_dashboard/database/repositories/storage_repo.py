# retail_dashboard/database/repositories/storage_repo.py
from __future__ import annotations

"""
Key/value persistence for the two top-level collections.

Each collection is one row in kv_store holding a JSON array. Conventions:
- load() returns plain dicts; typed conversion lives in products_repo/sales_repo.
- A collection that was never saved loads as its seed data (see seeders).
- Writes run in an IMMEDIATE transaction; errors roll back and propagate.
"""

import json
import sqlite3
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from ...constants import KEY_PRODUCTS, KEY_SALES, TABLE_KV_STORE
from ..seeders.default_data import seed_for


class StorageKind(str, Enum):
    PRODUCTS = KEY_PRODUCTS
    SALES = KEY_SALES


class StorageRepo:
    def __init__(
        self,
        conn: sqlite3.Connection,
        seeds: Optional[Callable[[str], List[Dict]]] = seed_for,
    ):
        self.conn = conn
        self.conn.row_factory = sqlite3.Row
        # seeds=None disables seed data (empty collections on first load)
        self._seeds = seeds

    # ---------------------------- TX helper ----------------------------

    @contextmanager
    def _immediate_tx(self):
        """
        Start an IMMEDIATE transaction, commit on success, rollback on error.
        """
        cur = self.conn.cursor()
        try:
            cur.execute("BEGIN IMMEDIATE")
            yield
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        finally:
            cur.close()

    # ---------------------------- Reads ----------------------------

    def has(self, kind: StorageKind | str) -> bool:
        row = self.conn.execute(
            f"SELECT 1 FROM {TABLE_KV_STORE} WHERE key=?", (self._key(kind),)
        ).fetchone()
        return row is not None

    def load(self, kind: StorageKind | str) -> List[Dict]:
        key = self._key(kind)
        row = self.conn.execute(
            f"SELECT value FROM {TABLE_KV_STORE} WHERE key=?", (key,)
        ).fetchone()
        if row is None:
            return list(self._seeds(key)) if self._seeds else []
        data = json.loads(row["value"])
        if not isinstance(data, list):
            raise ValueError(f"Stored collection {key!r} is not a JSON array.")
        return [dict(item) for item in data]

    # ---------------------------- Writes ----------------------------

    def save(self, kind: StorageKind | str, items: Iterable[Mapping]) -> None:
        self.save_many({kind: items})

    def save_many(self, collections: Mapping[StorageKind | str, Iterable[Mapping]]) -> None:
        """Write several collections in a single transaction (all or nothing)."""
        payload = [
            (self._key(kind), json.dumps([dict(i) for i in items], ensure_ascii=False))
            for kind, items in collections.items()
        ]
        with self._immediate_tx():
            self.conn.executemany(
                f"""
                INSERT INTO {TABLE_KV_STORE}(key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                payload,
            )

    # ---------------------------- Utilities ----------------------------

    @staticmethod
    def _key(kind: StorageKind | str) -> str:
        return kind.value if isinstance(kind, StorageKind) else StorageKind(kind).value

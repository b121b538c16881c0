# retail_dashboard/database/schema.py
from __future__ import annotations

from pathlib import Path
import sqlite3

from ..constants import TABLE_KV_STORE, TABLE_SCHEMA_VERSION

SQL = f"""
PRAGMA foreign_keys = ON;

/* -------- schema version (single row) -------- */
CREATE TABLE IF NOT EXISTS {TABLE_SCHEMA_VERSION} (
    id      INTEGER PRIMARY KEY CHECK (id = 1),
    version TEXT NOT NULL
);

/* -------- key/value collections --------
   One row per collection ("products", "sales"); value is a JSON array.
   A missing row means the collection was never saved (seed data applies). */
CREATE TABLE IF NOT EXISTS {TABLE_KV_STORE} (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL CHECK (json_valid(value)),
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""


def apply_schema(conn: sqlite3.Connection) -> None:
    """Apply the idempotent schema on an open connection."""
    conn.executescript(SQL)


def init_schema(db_path: Path | str) -> None:
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    con = sqlite3.connect(db_path)
    try:
        apply_schema(con)
        con.commit()
    finally:
        con.close()


if __name__ == "__main__":
    import sys
    from ..config import DB_PATH

    target = Path(sys.argv[1]) if len(sys.argv) > 1 else DB_PATH
    init_schema(target)
    print(f"Schema applied to {target}")

"""Database schema DDL and initialization.

Tables:
  - kv_store: key/value slots for on-device style persistence (the conversion
    history lives under a single key as one JSON blob)
"""

from __future__ import annotations
import sqlite3
from pathlib import Path
from typing import Sequence

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

KV_STORE_DDL = f"""
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

ALL_DDL: Sequence[str] = (KV_STORE_DDL,)


def init_db(db_path: Path) -> None:
    """Create tables if missing (idempotent)."""
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    try:
        cur = conn.cursor()
        for ddl in ALL_DDL:
            cur.executescript(ddl)
        conn.commit()
    finally:
        conn.close()

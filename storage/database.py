"""
SQLite storage backend for the stocks watchlist.

One row per symbol in the `stocks` table, mirroring FinancialSnapshot.

Usage:
    from storage.database import DatabaseManager
    db = DatabaseManager()
    db.insert(snapshot)
    db.get("aapl")
"""

import json
import logging
import os
import sqlite3
from typing import List, Optional

from models import FinancialSnapshot
from storage.base import SnapshotStore, StoreError, key

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.path.join(BASE_DIR, "data")
DEFAULT_DB_PATH = os.path.join(DATA_DIR, "stocks.db")


# ---------------------------------------------------------------------------
# Schema DDL
# ---------------------------------------------------------------------------

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS stocks (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    name              TEXT NOT NULL UNIQUE,
    current_price     REAL DEFAULT 0.0,
    eps_ttm           REAL DEFAULT 0.0,
    pe_ratio          REAL DEFAULT 0.0,
    total_debt_equity REAL DEFAULT 0.0,
    change_since      TEXT DEFAULT '',
    market_cap        TEXT DEFAULT '',
    peg_ratio         REAL DEFAULT 0.0,
    price_to_book     REAL DEFAULT 0.0,
    revenue           TEXT DEFAULT '',
    gross_profit      TEXT DEFAULT '',
    total_cash        TEXT DEFAULT '',
    total_debt        TEXT DEFAULT '',
    return_on_equity  TEXT DEFAULT '',
    return_on_assets  TEXT DEFAULT '',
    bvps              REAL DEFAULT 0.0,
    missing_fields    TEXT DEFAULT '[]'
);
"""

# Snapshot field -> column, in column order after `name`
COLUMNS = [
    ("current_price", "current_price"),
    ("eps_ttm", "eps_ttm"),
    ("pe_ratio", "pe_ratio"),
    ("debt_equity_ratio", "total_debt_equity"),
    ("change_since", "change_since"),
    ("market_cap", "market_cap"),
    ("peg_ratio", "peg_ratio"),
    ("price_to_book", "price_to_book"),
    ("revenue", "revenue"),
    ("gross_profit", "gross_profit"),
    ("total_cash", "total_cash"),
    ("total_debt", "total_debt"),
    ("return_on_equity", "return_on_equity"),
    ("return_on_assets", "return_on_assets"),
    ("bvps", "bvps"),
]


class DatabaseManager(SnapshotStore):
    """SQLite database manager for the watchlist."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
        self.db_path = db_path
        self.conn = sqlite3.connect(db_path)
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.row_factory = sqlite3.Row
        self._create_schema()

    def _create_schema(self):
        self.conn.executescript(SCHEMA_SQL)
        self.conn.commit()

    def close(self):
        self.conn.close()

    # ------------------------------------------------------------------
    # SnapshotStore
    # ------------------------------------------------------------------

    def exists(self, symbol: str) -> bool:
        cur = self.conn.execute("SELECT 1 FROM stocks WHERE name = ?", (key(symbol),))
        return cur.fetchone() is not None

    def insert(self, snapshot: FinancialSnapshot) -> None:
        columns = ["name"] + [col for _, col in COLUMNS] + ["missing_fields"]
        sql = f"""
            INSERT INTO stocks ({', '.join(columns)})
            VALUES ({', '.join('?' for _ in columns)})
        """
        try:
            self.conn.execute(sql, (key(snapshot.symbol),) + self._values(snapshot))
        except sqlite3.IntegrityError as e:
            raise StoreError(f"Stock {snapshot.symbol} already exists") from e
        self.conn.commit()
        logger.debug(f"Inserted {snapshot.symbol} into {self.db_path}")

    def update(self, snapshot: FinancialSnapshot) -> bool:
        assignments = ", ".join(f"{col} = ?" for _, col in COLUMNS) + ", missing_fields = ?"
        cur = self.conn.execute(
            f"UPDATE stocks SET {assignments} WHERE name = ?",
            self._values(snapshot) + (key(snapshot.symbol),),
        )
        self.conn.commit()
        return cur.rowcount == 1

    def drop(self, symbol: str) -> bool:
        cur = self.conn.execute("DELETE FROM stocks WHERE name = ?", (key(symbol),))
        self.conn.commit()
        return cur.rowcount == 1

    def get(self, symbol: str) -> Optional[FinancialSnapshot]:
        cur = self.conn.execute("SELECT * FROM stocks WHERE name = ?", (key(symbol),))
        row = cur.fetchone()
        if row is None:
            return None

        values = {field: row[col] for field, col in COLUMNS}
        return FinancialSnapshot(
            symbol=row["name"],
            missing_fields=tuple(json.loads(row["missing_fields"] or "[]")),
            **values,
        )

    def list_symbols(self) -> List[str]:
        cur = self.conn.execute("SELECT name FROM stocks ORDER BY id")
        return [r["name"] for r in cur.fetchall()]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def query(self, sql: str, params: tuple = ()) -> list[dict]:
        """Execute a raw SQL query and return results as list of dicts (debugging and tests)."""
        cur = self.conn.execute(sql, params)
        return [dict(r) for r in cur.fetchall()]

    @staticmethod
    def _values(snapshot: FinancialSnapshot) -> tuple:
        return tuple(getattr(snapshot, field) for field, _ in COLUMNS) + (
            json.dumps(list(snapshot.missing_fields)),
        )

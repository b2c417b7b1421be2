"""
Flat-file storage backend for the stocks watchlist.

One stock per line:

    aapl,Current Price: 189.5 +1.20% 19.10.2026,EPS: 6.13,P/E Ratio: 30.9,...,Book Value per Share: 4.4;

The file is read in full on every call and rewritten in full on update/drop.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

from models import FinancialSnapshot
from storage.base import SnapshotStore, StoreError, key

logger = logging.getLogger(__name__)

ROW_END = ";"

# Row label -> snapshot field, in row order after the symbol
LABELS = [
    ("EPS", "eps_ttm"),
    ("P/E Ratio", "pe_ratio"),
    ("Debt to Equity Ratio", "debt_equity_ratio"),
    ("Market Cap", "market_cap"),
    ("PEG Ratio", "peg_ratio"),
    ("Price to Book", "price_to_book"),
    ("Revenue", "revenue"),
    ("Gross Profit", "gross_profit"),
    ("Total Cash", "total_cash"),
    ("Total Debt", "total_debt"),
    ("Return on Equity", "return_on_equity"),
    ("Return on Assets", "return_on_assets"),
    ("Book Value per Share", "bvps"),
]
PRICE_LABEL = "Current Price"
MISSING_LABEL = "Missing"

_ALL_LABELS = [PRICE_LABEL] + [label for label, _ in LABELS] + [MISSING_LABEL]
# Split only on commas that start a new "Label: " segment
_SEGMENT_SPLIT = re.compile(",(?=(?:" + "|".join(re.escape(l) for l in _ALL_LABELS) + "): )")


def format_row(snapshot: FinancialSnapshot) -> str:
    price = f"{snapshot.current_price} {snapshot.change_since}".rstrip()
    segments = [key(snapshot.symbol), f"{PRICE_LABEL}: {price}"]
    segments += [f"{label}: {getattr(snapshot, field)}" for label, field in LABELS]
    if snapshot.missing_fields:
        segments.append(f"{MISSING_LABEL}: {'|'.join(snapshot.missing_fields)}")
    return ",".join(segments) + ROW_END


def parse_row(row: str) -> FinancialSnapshot:
    """
    Rebuild a snapshot from one stored line.

    Raises:
        StoreError: if the line has no symbol or a segment is malformed
    """
    row = row.strip().rstrip(ROW_END)
    symbol, _, rest = row.partition(",")
    if not symbol:
        raise StoreError(f"Malformed watchlist row: {row!r}")

    values: Dict[str, str] = {}
    for segment in _SEGMENT_SPLIT.split(rest) if rest else []:
        label, sep, value = segment.partition(": ")
        if not sep:
            raise StoreError(f"Malformed segment {segment!r} for {symbol}")
        values[label] = value

    fields = {field: values[label] for label, field in LABELS if label in values}

    price, _, change = values.get(PRICE_LABEL, "").partition(" ")
    if price:
        fields["current_price"] = price
    fields["change_since"] = change

    missing = values.get(MISSING_LABEL, "")
    return FinancialSnapshot(
        symbol=symbol,
        missing_fields=tuple(m for m in missing.split("|") if m),
        **fields,
    )


class FlatFileStore(SnapshotStore):
    """Watchlist kept in a plain text file (config/stocks.txt by default)."""

    def __init__(self, path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)

    def _read(self) -> List[FinancialSnapshot]:
        if not self.path.exists():
            raise StoreError(f"Watchlist file {self.path} does not exist. Run 'init' first.")
        with open(self.path, "r") as f:
            return [parse_row(line) for line in f if line.strip()]

    def _write(self, snapshots: List[FinancialSnapshot]) -> None:
        with open(self.path, "w") as f:
            for snapshot in snapshots:
                f.write(format_row(snapshot) + "\n")
        logger.debug(f"Rewrote {self.path} with {len(snapshots)} stocks")

    # ------------------------------------------------------------------
    # SnapshotStore
    # ------------------------------------------------------------------

    def exists(self, symbol: str) -> bool:
        return self.get(symbol) is not None

    def insert(self, snapshot: FinancialSnapshot) -> None:
        if self.exists(snapshot.symbol):
            raise StoreError(f"Stock {snapshot.symbol} already exists")
        with open(self.path, "a") as f:
            f.write(format_row(snapshot) + "\n")

    def update(self, snapshot: FinancialSnapshot) -> bool:
        snapshots = self._read()
        target = key(snapshot.symbol)
        found = False
        for i, stored in enumerate(snapshots):
            if stored.symbol == target:
                snapshots[i] = snapshot
                found = True
        if found:
            self._write(snapshots)
        return found

    def drop(self, symbol: str) -> bool:
        snapshots = self._read()
        remaining = [s for s in snapshots if s.symbol != key(symbol)]
        if len(remaining) == len(snapshots):
            return False
        self._write(remaining)
        return True

    def get(self, symbol: str) -> Optional[FinancialSnapshot]:
        target = key(symbol)
        for snapshot in self._read():
            if snapshot.symbol == target:
                return snapshot
        return None

    def list_symbols(self) -> List[str]:
        return [s.symbol for s in self._read()]

"""
Watchlist operations: add, list, search, drop and refresh stocks.

Works against any SnapshotStore; pages are fetched through YahooFetcher and
turned into snapshots by StockData.
"""

import datetime
import logging
from typing import List, Optional

from models import FinancialSnapshot
from sources.yahoo.extractor import symbol_exists
from sources.yahoo.fetcher import FetchError, YahooFetcher
from sources.yahoo.stock_data import StockData
from storage.base import SnapshotStore, StoreError, key
from utils import log

logger = logging.getLogger(__name__)


class Watchlist:
    """Stocks tracked in one storage backend."""

    def __init__(self, store: SnapshotStore, fetcher: Optional[YahooFetcher] = None):
        self.store = store
        self.fetcher = fetcher or YahooFetcher()

    def add(self, symbol: str) -> bool:
        """
        Fetch a new symbol and store its snapshot.

        Raises:
            FetchError: if either page cannot be retrieved
        """
        symbol = key(symbol)
        if self.store.exists(symbol):
            log.warn("Stock already exists")
            return False

        summary = self.fetcher.fetch_summary(symbol)
        if not symbol_exists(summary):
            log.err("Stock symbol is not valid. Make sure that it exists.")
            return False

        snapshot = self._build(symbol, summary)
        self.store.insert(snapshot)
        log.ok("Stock was added")
        return True

    def list_symbols(self) -> List[str]:
        return [s.upper() for s in self.store.list_symbols()]

    def search(self, symbol: str) -> Optional[FinancialSnapshot]:
        snapshot = self.store.get(symbol)
        if snapshot is None:
            log.err("Stock was not found")
        return snapshot

    def drop(self, symbol: str) -> bool:
        if self.store.drop(symbol):
            log.ok("Stock was deleted")
            return True
        log.err("Stock could not be found")
        return False

    def update(self, symbol: str) -> bool:
        """
        Re-fetch a stored symbol and replace its snapshot.

        Raises:
            FetchError: if either page cannot be retrieved
        """
        symbol = key(symbol)
        if not self.store.exists(symbol):
            log.err("Stock was not found")
            return False

        snapshot = self._build(symbol)
        self.store.update(snapshot)
        log.ok(f"Stock {symbol.upper()} was updated!")
        return True

    def update_all(self) -> dict:
        """
        Refresh every stored symbol, one after another.

        A failure is reported for its symbol and the batch moves on.
        Returns {"updated": [...], "failed": [...]}.
        """
        start = datetime.datetime.now()
        symbols = self.store.list_symbols()
        log.step("This may take a while...")

        updated, failed = [], []
        for i, symbol in enumerate(symbols, 1):
            try:
                snapshot = self._build(symbol)
                self.store.update(snapshot)
                updated.append(symbol)
                log.progress(i, len(symbols), symbol, f"{log.C.OK}updated{log.C.RESET}")

            except FetchError as e:
                failed.append(symbol)
                log.progress(i, len(symbols), symbol, f"{log.C.ERR}fetch failed{log.C.RESET} - {e}")
                logger.warning(f"{symbol}: {e}")

            except StoreError as e:
                failed.append(symbol)
                log.progress(i, len(symbols), symbol, f"{log.C.ERR}not saved{log.C.RESET} - {e}")
                logger.error(f"{symbol}: {e}")

        log.summary_table("Update Summary", [
            ("Stocks", str(len(symbols))),
            ("Updated", str(len(updated))),
            ("Failed", ", ".join(s.upper() for s in failed) or "none"),
            ("Elapsed", str(datetime.datetime.now() - start)),
        ])
        log.ok("Updating finished!")
        return {"updated": updated, "failed": failed}

    def _build(self, symbol: str, summary=None) -> FinancialSnapshot:
        if summary is None:
            summary = self.fetcher.fetch_summary(symbol)
        statistics = self.fetcher.fetch_statistics(symbol)
        return StockData(symbol, summary, statistics).snapshot()

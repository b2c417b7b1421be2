"""
Base interface for snapshot storage backends.

A backend persists one FinancialSnapshot per symbol. Symbols are keyed
case-insensitively (stored lower-case).
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from models import FinancialSnapshot


class SnapshotStore(ABC):
    """Abstract base class for watchlist storage."""

    @abstractmethod
    def exists(self, symbol: str) -> bool:
        pass

    @abstractmethod
    def insert(self, snapshot: FinancialSnapshot) -> None:
        """
        Add a new symbol.

        Raises:
            StoreError: if the symbol is already stored
        """
        pass

    @abstractmethod
    def update(self, snapshot: FinancialSnapshot) -> bool:
        """Replace the stored snapshot. Returns False if the symbol is unknown."""
        pass

    @abstractmethod
    def drop(self, symbol: str) -> bool:
        """Remove a symbol. Returns False if it was not stored."""
        pass

    @abstractmethod
    def get(self, symbol: str) -> Optional[FinancialSnapshot]:
        pass

    @abstractmethod
    def list_symbols(self) -> List[str]:
        """Stored symbols in insertion order."""
        pass

    def close(self) -> None:
        pass


class StoreError(Exception):
    """Raised when a storage operation cannot be applied."""
    pass


def key(symbol: str) -> str:
    return symbol.strip().lower()

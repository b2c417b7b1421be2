"""
Pydantic data models for the stocks watchlist.

FinancialSnapshot is the record persisted per symbol; ChangeReport is the
result of a price-history query. Both are immutable once built.
"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


# Returned by a price lookup when the exchange did not trade that day.
NO_TRADING_SENTINEL = 0.0

NUMERIC_SENTINEL = 0.0
TEXT_SENTINEL = ""


# ---------------------------------------------------------------------------
# Fundamentals snapshot
# ---------------------------------------------------------------------------

class FinancialSnapshot(BaseModel):
    """
    Fundamental metrics for one symbol as of the last fetch.

    Every field is extracted independently. A field that could not be read
    holds its sentinel (0.0 for numbers, "" for text) and is named in
    missing_fields, so a genuine zero can be told apart from a failed read.
    """
    model_config = ConfigDict(frozen=True)

    symbol: str
    current_price: float = NUMERIC_SENTINEL
    eps_ttm: float = NUMERIC_SENTINEL
    pe_ratio: float = NUMERIC_SENTINEL
    market_cap: str = TEXT_SENTINEL
    change_since: str = TEXT_SENTINEL
    debt_equity_ratio: float = NUMERIC_SENTINEL
    price_to_book: float = NUMERIC_SENTINEL
    peg_ratio: float = NUMERIC_SENTINEL
    revenue: str = TEXT_SENTINEL
    gross_profit: str = TEXT_SENTINEL
    total_cash: str = TEXT_SENTINEL
    total_debt: str = TEXT_SENTINEL
    return_on_equity: str = TEXT_SENTINEL
    return_on_assets: str = TEXT_SENTINEL
    bvps: float = NUMERIC_SENTINEL
    missing_fields: tuple[str, ...] = ()

    def display_rows(self) -> list[tuple[str, str]]:
        """Label/value pairs in the order the CLI prints them."""
        return [
            ("Current Price", f"{self.current_price} {self.change_since}".rstrip()),
            ("Market Cap", self.market_cap),
            ("EPS (ttm)", str(self.eps_ttm)),
            ("P/E", str(self.pe_ratio)),
            ("PEG ratio", str(self.peg_ratio)),
            ("Price/Book (mrq)", str(self.price_to_book)),
            ("Book Value per Share (mrq)", str(self.bvps)),
            ("Revenue (ttm)", self.revenue),
            ("Gross Profit (ttm)", self.gross_profit),
            ("Total Cash (mrq)", self.total_cash),
            ("Total Debt (mrq)", self.total_debt),
            ("Total Debt/Equity", str(self.debt_equity_ratio)),
            ("Return on Equity (ttm)", self.return_on_equity),
            ("Return on Assets (ttm)", self.return_on_assets),
        ]


# ---------------------------------------------------------------------------
# Price history
# ---------------------------------------------------------------------------

class ChangeReport(BaseModel):
    """Comparison of the stored price against the close on a past day."""
    model_config = ConfigDict(frozen=True)

    symbol: str
    current_price: float
    historical_price: float
    date: datetime.date
    weekday: str
    percentage: Optional[float] = None
    direction: Optional[Literal["increase", "decrease"]] = None

    @property
    def no_data(self) -> bool:
        return self.percentage is None

    @property
    def change(self) -> Optional[float]:
        """Signed change in percent (negative for a decrease)."""
        if self.percentage is None:
            return None
        return self.percentage - 100.0

    def lines(self) -> list[str]:
        if self.no_data:
            return ["Please take another day."]

        d = self.date
        label = "Increase" if self.direction == "increase" else "Decrease"
        return [
            f"Stock: {self.symbol.upper()}",
            f"Price since last update: {self.current_price}",
            f"Date {d.day}.{d.month}.{d.year}, {self.weekday}",
            f"Price: {self.historical_price:.2f}",
            f"{label} until today: {self.change:.2f}%",
        ]

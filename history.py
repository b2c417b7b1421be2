"""
Price-history queries: how has a watched stock moved since a past date?

Usage:
    from history import run_history
    result = run_history("aapl", "2.weeks.ago", store)
    for line in result.lines():
        print(line)
"""

import datetime
import logging
from typing import Optional

from models import NO_TRADING_SENTINEL, ChangeReport
from sources.yahoo.fetcher import YahooFetcher
from sources.yahoo.history import historical_price
from storage.base import SnapshotStore
from utils import dates, log

logger = logging.getLogger(__name__)


def report(symbol: str, current_price: float, historical: float,
           date: datetime.date, weekday_name: str) -> ChangeReport:
    """
    Compare the stored price with the close on `date`.

    A historical price of 0.0 means the market did not trade that day; the
    report then carries no percentage and renders "Please take another day."
    """
    if historical == NO_TRADING_SENTINEL:
        return ChangeReport(
            symbol=symbol,
            current_price=current_price,
            historical_price=historical,
            date=date,
            weekday=weekday_name,
        )

    percentage = current_price / historical * 100
    return ChangeReport(
        symbol=symbol,
        current_price=current_price,
        historical_price=historical,
        date=date,
        weekday=weekday_name,
        percentage=percentage,
        direction="increase" if percentage > 100 else "decrease",
    )


def run_history(symbol: str, expr: str, store: SnapshotStore,
                fetcher: Optional[YahooFetcher] = None,
                now: Optional[datetime.datetime] = None) -> Optional[ChangeReport]:
    """
    Resolve `expr` to a trading day and report the change since then.

    Returns None when the symbol is not on the watchlist.

    Raises:
        DateExpressionError: unreadable or future date (before any fetch)
        FetchError: the chart request failed
    """
    snapshot = store.get(symbol)
    if snapshot is None:
        log.err(f"Stock {symbol} was not found.")
        return None

    day = dates.normalize(dates.resolve(expr, now=now))
    logger.debug(f"{symbol}: {expr!r} resolved to {day}")

    price = historical_price(symbol, day.day, day.month, day.year, fetcher=fetcher)
    return report(symbol, snapshot.current_price, price, day, dates.weekday_name(day))

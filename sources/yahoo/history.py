"""
Closing price of a symbol on one calendar day, from the v8 chart API.
"""

import datetime
import logging
from typing import Dict, Optional

from models import NO_TRADING_SENTINEL
from sources.yahoo.fetcher import YahooFetcher
from utils import log

logger = logging.getLogger(__name__)


def day_bounds(day: int, month: int, year: int) -> tuple[int, int]:
    """Unix timestamps of 00:00:00 and 23:59:59 UTC on the given day."""
    start = datetime.datetime(year, month, day, 0, 0, 0, tzinfo=datetime.timezone.utc)
    end = datetime.datetime(year, month, day, 23, 59, 59, tzinfo=datetime.timezone.utc)
    return int(start.timestamp()), int(end.timestamp())


def first_close(payload: Dict) -> Optional[float]:
    """
    chart.result[0].indicators.quote[0].close[0], or None when any level of
    that path is missing, empty or null.
    """
    result = (payload.get("chart") or {}).get("result") or []
    if not result:
        return None
    quotes = ((result[0] or {}).get("indicators") or {}).get("quote") or []
    if not quotes:
        return None
    closes = (quotes[0] or {}).get("close") or []
    if not closes or closes[0] is None:
        return None
    return float(closes[0])


def historical_price(symbol: str, day: int, month: int, year: int,
                     fetcher: Optional[YahooFetcher] = None) -> float:
    """
    Close price for symbol on day.month.year.

    Returns NO_TRADING_SENTINEL (0.0) when the exchange did not trade that
    day. FetchError from the transport propagates unchanged.
    """
    fetcher = fetcher or YahooFetcher()
    start, end = day_bounds(day, month, year)

    payload = fetcher.fetch_series(symbol, start, end)
    price = first_close(payload)

    if price is None:
        log.info("Date is a holiday or a day in which the stock exchange was closed.")
        logger.debug(f"{symbol}: no close in [{start}, {end}]")
        return NO_TRADING_SENTINEL

    logger.debug(f"{symbol}: close {price} on {day}.{month}.{year}")
    return price

"""
Yahoo Finance page fetcher.

Retrieves the quote-summary and key-statistics HTML documents for a symbol
and the daily-interval chart JSON for a timestamp window. Every call issues
exactly one blocking request; nothing is cached, so repeated calls re-fetch.
"""

import logging
from typing import Dict, Optional

import requests
from bs4 import BeautifulSoup

from config import settings
from utils.session import RequestSession

logger = logging.getLogger(__name__)

SUMMARY_URL = "https://finance.yahoo.com/quote/{symbol}?p={symbol}&.tsrc=fin-srch"
STATISTICS_URL = "https://finance.yahoo.com/quote/{symbol}/key-statistics?p={symbol}"
CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart/{symbol}"

HTML_PARSER = "html.parser"


class FetchError(Exception):
    """Raised when a page or payload cannot be retrieved or parsed."""
    pass


class YahooFetcher:
    """Fetches raw documents from Yahoo Finance for one symbol at a time."""

    def __init__(self, timeout: Optional[float] = None):
        self.session = RequestSession(timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT)

    def fetch_summary(self, symbol: str) -> BeautifulSoup:
        """Fetch and parse the quote-summary page."""
        return self._fetch_document(SUMMARY_URL.format(symbol=_require(symbol)))

    def fetch_statistics(self, symbol: str) -> BeautifulSoup:
        """Fetch and parse the key-statistics page."""
        return self._fetch_document(STATISTICS_URL.format(symbol=_require(symbol)))

    def fetch_series(self, symbol: str, start_ts: int, end_ts: int) -> Dict:
        """
        Fetch the daily chart payload for [start_ts, end_ts].

        The provider answers an empty window with an error body and a 4xx
        status; such a body is still returned so the caller can decide that
        the day had no trading.

        Raises:
            FetchError: on transport failure or a body that is not chart JSON
        """
        symbol = _require(symbol)
        params = {
            "symbol": symbol,
            "period1": start_ts,
            "period2": end_ts,
            "interval": "1d",
        }
        resp = self._get(CHART_URL.format(symbol=symbol), params=params)

        try:
            payload = resp.json()
        except ValueError as e:
            raise FetchError(f"{symbol}: chart response is not JSON (HTTP {resp.status_code})") from e

        if not isinstance(payload, dict) or "chart" not in payload:
            raise FetchError(f"{symbol}: unexpected chart response (HTTP {resp.status_code})")

        return payload

    def close(self) -> None:
        self.session.close()

    def _fetch_document(self, url: str) -> BeautifulSoup:
        resp = self._get(url)
        # Unknown symbols come back as the lookup page, sometimes with a 404
        if not resp.ok:
            logger.debug(f"HTTP {resp.status_code} for {url}, parsing body anyway")
        if not resp.text or not resp.text.strip():
            raise FetchError(f"HTTP {resp.status_code}: empty page for {url}")
        return BeautifulSoup(resp.text, HTML_PARSER)

    def _get(self, url: str, params: Optional[Dict] = None) -> requests.Response:
        try:
            return self.session.get(url, params=params)
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Request failed: {e}") from e


def _require(symbol: str) -> str:
    if not symbol or not symbol.strip():
        raise ValueError("symbol must be a non-empty string")
    return symbol.strip()

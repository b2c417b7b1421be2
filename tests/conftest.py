"""Shared fixtures for the test suite."""

import datetime

import pytest
from bs4 import BeautifulSoup
from unittest.mock import MagicMock

from models import FinancialSnapshot
from storage.database import DatabaseManager
from storage.flat_file import FlatFileStore


# Monday
NOW = datetime.datetime(2026, 10, 19, 12, 0, 0)
TODAY = NOW.date()


SUMMARY_HTML = """
<html><body>
<div id="quote-header-info">
  <fin-streamer data-field="regularMarketPrice" data-test="qsp-price">189.50</fin-streamer>
  <fin-streamer data-field="regularMarketChangePercent"><span>(+1.20%)</span></fin-streamer>
</div>
<table>
  <tr><td>Market Cap</td><td data-test="MARKET_CAP-value">2.95T</td></tr>
  <tr><td>PE Ratio (TTM)</td><td data-test="PE_RATIO-value">30.91</td></tr>
  <tr><td>EPS (TTM)</td><td data-test="EPS_RATIO-value">6.13</td></tr>
</table>
</body></html>
"""

STATISTICS_HTML = """
<html><body><table>
<tr><td><span>Price/Book</span> <!-- -->(mrq)</td><td>47.26</td></tr>
<tr><td><span>PEG Ratio (5 yr expected)</span></td><td>2.75</td></tr>
<tr><td><span>Return on Assets</span> <!-- -->(ttm)</td><td>22.07%</td></tr>
<tr><td><span>Return on Equity</span> <!-- -->(ttm)</td><td>160.58%</td></tr>
<tr><td><span>Revenue</span> <!-- -->(ttm)</td><td>383.29B</td></tr>
<tr><td><span>Gross Profit</span> <!-- -->(ttm)</td><td>169.15B</td></tr>
<tr><td><span>Total Cash</span> <!-- -->(mrq)</td><td>61.55B</td></tr>
<tr><td><span>Total Debt</span> <!-- -->(mrq)</td><td>111.09B</td></tr>
<tr><td><span>Total Debt/Equity</span> <!-- -->(mrq)</td><td>145.80</td></tr>
<tr><td><span>Book Value Per Share</span> <!-- -->(mrq)</td><td>4.38</td></tr>
</table></body></html>
"""

LOOKUP_HTML = """
<html><body><section id="lookup-page"><p>Symbols similar to 'zzzz'</p></section></body></html>
"""


def chart_payload(close):
    """v8 chart body with a single daily close."""
    return {
        "chart": {
            "result": [{
                "meta": {"symbol": "AAPL"},
                "timestamp": [1760880600],
                "indicators": {"quote": [{"close": [close]}]},
            }],
            "error": None,
        }
    }


@pytest.fixture
def summary_doc():
    return BeautifulSoup(SUMMARY_HTML, "html.parser")


@pytest.fixture
def statistics_doc():
    return BeautifulSoup(STATISTICS_HTML, "html.parser")


@pytest.fixture
def lookup_doc():
    return BeautifulSoup(LOOKUP_HTML, "html.parser")


@pytest.fixture
def tmp_db(tmp_path):
    """Fresh DatabaseManager backed by a real SQLite DB in tmp_path."""
    db_path = str(tmp_path / "test.db")
    db = DatabaseManager(db_path=db_path)
    yield db
    db.close()


@pytest.fixture
def tmp_file_store(tmp_path):
    """FlatFileStore writing to tmp_path/stocks.txt."""
    return FlatFileStore(tmp_path / "stocks.txt")


@pytest.fixture
def sample_snapshot():
    """Factory fixture — call with overrides to get a FinancialSnapshot."""
    def _make(**overrides):
        values = {
            "symbol": "aapl",
            "current_price": 189.5,
            "eps_ttm": 6.13,
            "pe_ratio": 30.91,
            "market_cap": "2.95T",
            "change_since": "(+1.20%) 19.10.2026",
            "debt_equity_ratio": 145.8,
            "price_to_book": 47.26,
            "peg_ratio": 2.75,
            "revenue": "383.29B",
            "gross_profit": "169.15B",
            "total_cash": "61.55B",
            "total_debt": "111.09B",
            "return_on_equity": "160.58%",
            "return_on_assets": "22.07%",
            "bvps": 4.38,
        }
        values.update(overrides)
        return FinancialSnapshot(**values)
    return _make


@pytest.fixture
def mock_response():
    """Factory for mock HTTP responses."""
    def _make(status_code=200, json_data=None, text="", json_error=False):
        resp = MagicMock()
        resp.status_code = status_code
        resp.ok = status_code < 400
        resp.text = text
        if json_error:
            resp.json.side_effect = ValueError("No JSON object could be decoded")
        else:
            resp.json.return_value = json_data if json_data is not None else {}
        return resp
    return _make


@pytest.fixture
def mock_fetcher(summary_doc, statistics_doc):
    """YahooFetcher stand-in serving the sample documents."""
    fetcher = MagicMock()
    fetcher.fetch_summary.return_value = summary_doc
    fetcher.fetch_statistics.return_value = statistics_doc
    fetcher.fetch_series.return_value = chart_payload(100.0)
    return fetcher

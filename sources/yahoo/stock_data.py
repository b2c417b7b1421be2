"""
Builds a FinancialSnapshot from a symbol's summary and statistics documents.

Each field is read on its own; a field that is missing or does not parse is
reported by name and replaced with its sentinel, the rest of the snapshot is
unaffected.
"""

import datetime
import logging
from dataclasses import dataclass
from typing import Optional, Union

from bs4 import BeautifulSoup

from models import FinancialSnapshot, NUMERIC_SENTINEL, TEXT_SENTINEL
from sources.yahoo.extractor import (
    FieldNotFoundError,
    extract_statistics_field,
    extract_summary_field,
    report_missing,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SummaryField:
    """A quote-summary field read by CSS selector."""
    name: str
    selector: str
    display: str
    numeric: bool = True
    suffix: str = ""

    def read(self, doc: BeautifulSoup) -> Optional[str]:
        try:
            return extract_summary_field(doc, self.selector)
        except FieldNotFoundError:
            return None


@dataclass(frozen=True)
class StatisticsField:
    """A key-statistics field read by table-row label scan."""
    name: str
    label: str
    display: str
    numeric: bool = True
    suffix: str = ""

    def read(self, doc: BeautifulSoup) -> Optional[str]:
        return extract_statistics_field(doc, self.label, self.display, sentinel=None)


FieldSpec = Union[SummaryField, StatisticsField]

SUMMARY_FIELDS: tuple[SummaryField, ...] = (
    SummaryField("current_price", "fin-streamer[data-test='qsp-price']", "Current Price"),
    SummaryField("eps_ttm", "td[data-test='EPS_RATIO-value']", "EPS (ttm)"),
    SummaryField("pe_ratio", "td[data-test='PE_RATIO-value']", "P/E Ratio"),
    SummaryField("market_cap", "td[data-test='MARKET_CAP-value']", "Market Cap", numeric=False),
    SummaryField(
        "change_since",
        "div[id='quote-header-info'] fin-streamer[data-field='regularMarketChangePercent'] span",
        "Change since last update",
        numeric=False,
    ),
)

# Labels are matched against raw row markup, hence the span/comment fragments.
STATISTICS_FIELDS: tuple[StatisticsField, ...] = (
    StatisticsField("debt_equity_ratio", "Total Debt/Equity", "Total Debt/Equity"),
    StatisticsField("price_to_book", "Price/Book", "Price/Book"),
    StatisticsField("peg_ratio", "PEG Ratio (5 yr expected)", "PEG ratio"),
    StatisticsField("revenue", "Revenue</span> <!-- -->(ttm)", "Revenue (ttm)", numeric=False),
    StatisticsField("gross_profit", "Gross Profit</span> <!-- -->(ttm)", "Gross Profit (ttm)", numeric=False),
    StatisticsField("total_cash", "Total Cash</span> <!-- -->(mrq)", "Total Cash (mrq)", numeric=False),
    StatisticsField("total_debt", "Total Debt</span> <!-- -->(mrq)", "Total Debt (mrq)", numeric=False),
    StatisticsField("return_on_equity", "Return on Equity", "Return on Equity (ttm)", numeric=False, suffix="%"),
    StatisticsField("return_on_assets", "Return on Assets", "Return on Assets (ttm)", numeric=False, suffix="%"),
    StatisticsField("bvps", "Book Value Per Share", "Book Value Per Share (mrq)"),
)


def parse_number(text: str) -> float:
    """Parse a displayed number such as '1,234.56'."""
    return float(text.replace(",", "").strip())


class StockData:
    """Fundamentals of one symbol, read from already-fetched documents."""

    def __init__(self, symbol: str, summary: Optional[BeautifulSoup],
                 statistics: Optional[BeautifulSoup], today: Optional[datetime.date] = None):
        self.symbol = symbol.lower()
        self.summary = summary
        self.statistics = statistics
        self.today = today or datetime.date.today()

    def snapshot(self) -> FinancialSnapshot:
        values: dict = {}
        missing: list[str] = []

        for spec in SUMMARY_FIELDS:
            values[spec.name] = self._read(spec, self.summary, missing)
        for spec in STATISTICS_FIELDS:
            values[spec.name] = self._read(spec, self.statistics, missing)

        # Stamp the change with the day it was fetched
        if values["change_since"]:
            values["change_since"] = f"{values['change_since']} {self.today.strftime('%d.%m.%Y')}"

        logger.debug(f"{self.symbol}: snapshot built, missing={missing}")
        return FinancialSnapshot(symbol=self.symbol, missing_fields=tuple(missing), **values)

    def _read(self, spec: FieldSpec, doc: Optional[BeautifulSoup], missing: list[str]):
        raw = spec.read(doc) if doc is not None else None
        value = _convert(spec, raw)
        if value is not None:
            return value

        missing.append(spec.name)
        if spec.numeric:
            report_missing(spec.display, str(NUMERIC_SENTINEL))
            return NUMERIC_SENTINEL
        report_missing(spec.display, TEXT_SENTINEL)
        return TEXT_SENTINEL


def _convert(spec: FieldSpec, raw: Optional[str]):
    if not raw:
        return None
    if spec.numeric:
        try:
            return parse_number(raw)
        except ValueError:
            logger.debug(f"{spec.name}: {raw!r} is not a number")
            return None
    return raw + spec.suffix

"""Tests for sources.yahoo.extractor — selector and row-scan extraction."""

import pytest
from bs4 import BeautifulSoup

from sources.yahoo.extractor import (
    NUMBER_PATTERN,
    FieldNotFoundError,
    RowScanField,
    SelectorField,
    extract_statistics_field,
    extract_summary_field,
    symbol_exists,
)


def _doc(html):
    return BeautifulSoup(html, "html.parser")


class TestExtractSummaryField:
    def test_price(self, summary_doc):
        assert extract_summary_field(summary_doc, "fin-streamer[data-test='qsp-price']") == "189.50"

    def test_text_is_stripped(self):
        doc = _doc("<table><tr><td data-test='MARKET_CAP-value'>\n  2.95T  \n</td></tr></table>")
        assert extract_summary_field(doc, "td[data-test='MARKET_CAP-value']") == "2.95T"

    def test_first_match_wins(self):
        doc = _doc("<p class='v'>1.00</p><p class='v'>2.00</p>")
        assert extract_summary_field(doc, "p.v") == "1.00"

    def test_nested_change_span(self, summary_doc):
        selector = "div[id='quote-header-info'] fin-streamer[data-field='regularMarketChangePercent'] span"
        assert extract_summary_field(summary_doc, selector) == "(+1.20%)"

    def test_missing_raises(self, summary_doc):
        with pytest.raises(FieldNotFoundError) as exc:
            extract_summary_field(summary_doc, "td[data-test='NOPE-value']")
        assert exc.value.selector == "td[data-test='NOPE-value']"

    def test_selector_field_returns_none(self, summary_doc):
        assert SelectorField("span.nothing").extract(summary_doc) is None


class TestExtractStatisticsField:
    def test_simple_label(self, statistics_doc):
        assert extract_statistics_field(statistics_doc, "Total Debt/Equity", "Total Debt/Equity") == "145.80"

    def test_magnitude_suffix(self, statistics_doc):
        label = "Revenue</span> <!-- -->(ttm)"
        assert extract_statistics_field(statistics_doc, label, "Revenue (ttm)") == "383.29B"

    def test_percent_is_not_captured(self, statistics_doc):
        assert extract_statistics_field(statistics_doc, "Return on Equity", "Return on Equity") == "160.58"

    def test_label_in_markup_distinguishes_rows(self, statistics_doc):
        label = "Total Debt</span> <!-- -->(mrq)"
        assert extract_statistics_field(statistics_doc, label, "Total Debt (mrq)") == "111.09B"

    def test_missing_label_returns_sentinel(self, statistics_doc, capsys):
        value = extract_statistics_field(statistics_doc, "Forward Annual Dividend Yield", "Dividend Yield")
        assert value == "0.0"
        out = capsys.readouterr().out
        assert "Error happened when trying to get 'Dividend Yield', so this will be displayed as 0.0." in out

    def test_custom_sentinel(self, statistics_doc, capsys):
        assert extract_statistics_field(statistics_doc, "Beta", "Beta", sentinel="") == ""
        assert "displayed as empty" in capsys.readouterr().out

    def test_no_sentinel_is_silent(self, statistics_doc, capsys):
        assert extract_statistics_field(statistics_doc, "Beta", "Beta", sentinel=None) is None
        assert capsys.readouterr().out == ""

    def test_label_without_number(self, capsys):
        doc = _doc("<table><tr><td>Price/Book</td><td>N/A</td></tr></table>")
        assert extract_statistics_field(doc, "Price/Book", "Price/Book") == "0.0"

    def test_duplicate_label_takes_first_row(self):
        doc = _doc(
            "<table>"
            "<tr><td>Price/Book</td><td>1.50</td></tr>"
            "<tr><td>Price/Book</td><td>9.99</td></tr>"
            "</table>"
        )
        assert RowScanField("Price/Book").extract(doc) == "1.50"

    def test_integer_is_not_a_match(self):
        doc = _doc("<table><tr><td>Shares Outstanding</td><td>15</td></tr></table>")
        assert RowScanField("Shares Outstanding").extract(doc) is None


class TestNumberPattern:
    @pytest.mark.parametrize("text,expected", [
        ("12.34", "12.34"),
        ("2.95T", "2.95T"),
        ("value -3.50 here", "3.50"),
        ("1,234.56", "234.56"),
    ])
    def test_matches(self, text, expected):
        assert NUMBER_PATTERN.search(text).group(0) == expected

    def test_no_decimal(self):
        assert NUMBER_PATTERN.search("1234") is None


class TestSymbolExists:
    def test_quote_page(self, summary_doc):
        assert symbol_exists(summary_doc) is True

    def test_lookup_page(self, lookup_doc):
        assert symbol_exists(lookup_doc) is False

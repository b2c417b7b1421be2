"""
Field extraction from Yahoo Finance HTML documents.

Two strategies:

* SelectorField: first element matching a CSS selector, inner text.
  Used for the quote-summary page.
* RowScanField: inner HTML of every <tr> containing a label, concatenated,
  then the first NUMBER_PATTERN match. Used for the key-statistics page.

Known limitation of the row scan: if the label occurs in more than one row,
or the markup around the value carries another decimal number, the first
match wins and the value is wrong. Signs and thousands separators are not
part of the pattern. Nothing here validates the result.
"""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup

from utils import log

logger = logging.getLogger(__name__)

# Decimal number, optionally followed by a magnitude letter (12.3B, 45.67)
NUMBER_PATTERN = re.compile(r"\d+\.\d+[A-Z]?")

# Present on the summary page only when Yahoo could not resolve the symbol
NOT_FOUND_SELECTOR = "section[id='lookup-page']"


class FieldNotFoundError(LookupError):
    """Raised when a selector matches nothing in the document."""

    def __init__(self, selector: str):
        super().__init__(f"No element matches {selector!r}")
        self.selector = selector


class SelectorField:
    """Direct lookup of one element by CSS selector."""

    def __init__(self, selector: str):
        self.selector = selector

    def extract(self, doc: BeautifulSoup) -> Optional[str]:
        element = doc.select_one(self.selector)
        if element is None:
            return None
        return element.get_text(strip=True)


class RowScanField:
    """Label scan over table rows with a numeric-pattern match."""

    def __init__(self, label: str, pattern: re.Pattern = NUMBER_PATTERN):
        self.label = label
        self.pattern = pattern

    def extract(self, doc: BeautifulSoup) -> Optional[str]:
        html = "".join(
            inner for inner in (row.decode_contents() for row in doc.select("tr"))
            if self.label in inner
        )
        match = self.pattern.search(html)
        return match.group(0) if match else None


def extract_summary_field(doc: BeautifulSoup, selector: str) -> str:
    """
    Inner text of the first element matching selector.

    Raises:
        FieldNotFoundError: if nothing matches
    """
    value = SelectorField(selector).extract(doc)
    if value is None:
        raise FieldNotFoundError(selector)
    return value


def extract_statistics_field(doc: BeautifulSoup, label: str, fallback_label: str,
                             sentinel: Optional[str] = "0.0") -> Optional[str]:
    """
    First number found in the table rows that contain label.

    fallback_label is the human-readable field name used in the diagnostic
    when nothing matches; sentinel is returned in that case. With
    sentinel=None the miss is returned as None and left for the caller
    to report.
    """
    value = RowScanField(label).extract(doc)
    if value is None:
        logger.debug(f"No match for label {label!r}")
        if sentinel is not None:
            report_missing(fallback_label, sentinel)
        return sentinel
    return value


def report_missing(field_name: str, sentinel: str = "0.0") -> None:
    """Diagnostic line for a field that degraded to its sentinel."""
    shown = sentinel or "empty"
    log.warn(f"Error happened when trying to get '{field_name}', so this will be displayed as {shown}.")


def symbol_exists(doc: BeautifulSoup) -> bool:
    """False when the summary page is Yahoo's symbol lookup page."""
    return doc.select_one(NOT_FOUND_SELECTOR) is None

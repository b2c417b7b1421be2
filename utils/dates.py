"""
Date expressions for price-history queries.

An expression is either an absolute day.month.year date ("05.03.2024") or a
relative count of units back from now ("5.days", "2.weeks.ago",
"1.month", "3.years"). Month and year arithmetic is calendar-aware:
31 March minus one month is the last day of February.
"""

import datetime
import logging
from typing import Optional

import pandas as pd

from utils import log

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d.%m.%Y"

UNITS = {
    "day": "days", "days": "days",
    "week": "weeks", "weeks": "weeks",
    "month": "months", "months": "months",
    "year": "years", "years": "years",
}
UNIT_WORDS = ("day", "week", "month", "year")

USAGE = "Date needs to be in DMY (01.01.2020) format or NUMBER.days/weeks/months/years.ago"


class DateExpressionError(ValueError):
    """Raised for an unreadable date expression or a date that is not in the past."""
    pass


def is_relative(expr: str) -> bool:
    lowered = expr.lower()
    return any(word in lowered for word in UNIT_WORDS)


def resolve(expr: str, now: Optional[datetime.datetime] = None) -> datetime.date:
    """
    Turn a date expression into a calendar date.

    Args:
        expr: "DD.MM.YYYY" or "<n>.<unit>[.ago]"
        now: reference time, defaults to the local clock

    Raises:
        DateExpressionError: malformed expression, unknown unit, or a
            result that lies in the future
    """
    now = now or datetime.datetime.now()
    expr = expr.strip()

    if is_relative(expr):
        resolved = _subtract(expr, now)
        if resolved >= now:
            raise DateExpressionError(f"Date could not be read: {expr!r}. {USAGE}")
        logger.debug(f"{expr!r} -> {resolved.date()} (now={now})")
        return resolved.date()

    try:
        parsed = datetime.datetime.strptime(expr, DATE_FORMAT).date()
    except ValueError as e:
        raise DateExpressionError(f"Date could not be read: {expr!r}. {USAGE}") from e

    if parsed > now.date():
        raise DateExpressionError("The entered date lies in the future. Please provide a date from the past.")
    return parsed


def _subtract(expr: str, now: datetime.datetime) -> datetime.datetime:
    parts = expr.lower().split(".")
    if len(parts) < 2:
        raise DateExpressionError(f"Date could not be read: {expr!r}. {USAGE}")

    try:
        count = int(parts[0])
    except ValueError as e:
        raise DateExpressionError(f"Date could not be read: {expr!r}. {USAGE}") from e

    unit = UNITS.get(parts[1])
    if unit is None:
        raise DateExpressionError(f"Unknown unit {parts[1]!r}. {USAGE}")

    try:
        if unit == "days":
            return now - datetime.timedelta(days=count)
        if unit == "weeks":
            return now - datetime.timedelta(weeks=count)
        offset = pd.DateOffset(months=count) if unit == "months" else pd.DateOffset(years=count)
        return (pd.Timestamp(now) - offset).to_pydatetime()
    except (OverflowError, ValueError, pd.errors.OutOfBoundsDatetime) as e:
        raise DateExpressionError(f"Date is out of range: {expr!r}") from e


def normalize(d: datetime.date) -> datetime.date:
    """Move a Saturday or Sunday forward to the following Monday."""
    weekday = d.weekday()
    if weekday == 5:
        log.info("It's a Saturday so we'll take Monday.")
        return d + datetime.timedelta(days=2)
    if weekday == 6:
        log.info("It's a Sunday so we'll take Monday.")
        return d + datetime.timedelta(days=1)
    return d


def weekday_name(d: datetime.date) -> str:
    return d.strftime("%A")

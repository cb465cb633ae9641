"""Date utilities for warikan.

Pure functions for month extraction and billing-cycle windows.
"""

import re
from datetime import date

from warikan.domain.models import YearMonth

# Statements close on the 25th; a cycle runs from the 26th to the next 25th.
CYCLE_START_DAY = 26
CYCLE_END_DAY = 25

_YEAR_MONTH_PATTERN = re.compile(r"(\d{4})年(\d{1,2})月")
_MONTH_PATTERN = re.compile(r"(\d{1,2})月")


def extract_year_month(text: str, today: date) -> YearMonth:
    """Extract the target month from a chat message.

    - "2024年10月" -> that year and month
    - "10月" -> that month of today's year
    - otherwise -> today's month

    Args:
        text: Chat message.
        today: Current date.

    Returns:
        The requested YearMonth.

    Raises:
        ValueError: If the month number is out of range (e.g. "13月").
    """
    match = _YEAR_MONTH_PATTERN.search(text)
    if match:
        return YearMonth(int(match.group(1)), int(match.group(2)))

    match = _MONTH_PATTERN.search(text)
    if match:
        return YearMonth(today.year, int(match.group(1)))

    return YearMonth.from_date(today)


def has_month_specification(text: str) -> bool:
    """Check whether a chat message names a month."""
    return bool(_YEAR_MONTH_PATTERN.search(text) or _MONTH_PATTERN.search(text))


def billing_cycle_window(payment_month: YearMonth) -> tuple[date, date]:
    """Calculate the billing cycle settled in a payment month.

    Args:
        payment_month: Month in which the cycle is paid.

    Returns:
        Tuple of (start, end), both inclusive: the 26th two months before
        through the 25th of the previous month. For example 2024-10 gives
        2024-08-26 .. 2024-09-25, and 2025-01 gives 2024-11-26 .. 2024-12-25.
    """
    start_month = payment_month.shift(-2)
    end_month = payment_month.shift(-1)
    start = date(start_month.year, start_month.month, CYCLE_START_DAY)
    end = date(end_month.year, end_month.month, CYCLE_END_DAY)
    return start, end


def month_range(year_month: YearMonth) -> tuple[date, date]:
    """Return the first and last day of a calendar month."""
    first = date(year_month.year, year_month.month, 1)
    next_month = year_month.shift(1)
    last = date.fromordinal(date(next_month.year, next_month.month, 1).toordinal() - 1)
    return first, last

"""
Utility functions for the Advance Tax Worksheet.

This module contains helpers for date parsing, month arithmetic,
and INR formatting.
"""

import calendar
from datetime import date, datetime
from typing import Optional, Union


def parse_date(date_str: str, date_format: str = "%Y-%m-%d") -> date:
    """
    Parse date string to date object.

    Args:
        date_str: Date string (e.g., '2025-06-15')
        date_format: Expected format (default: YYYY-MM-DD)

    Returns:
        date object

    Raises:
        ValueError: If date_str doesn't match the expected format

    Examples:
        >>> parse_date('2025-06-15')
        date(2025, 6, 15)
        >>> parse_date('15/06/2025', '%d/%m/%Y')
        date(2025, 6, 15)
    """
    return datetime.strptime(date_str, date_format).date()


def parse_optional_date(value: Union[str, date, None]) -> Optional[date]:
    """Parse an ISO date string, passing through dates and blanks."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(str(value).strip())


def format_date(value: Optional[date]) -> Optional[str]:
    """Format a date as ISO string, or None."""
    return value.isoformat() if value else None


def _is_last_day_of_month(value: date) -> bool:
    return value.day == calendar.monthrange(value.year, value.month)[1]


def months_between(start: date, end: date) -> int:
    """
    Count whole calendar months from start to end.

    The last month is complete once the day of month of ``start`` is
    reached in ``end``'s month. Two month-end cases also complete it:
    ``end`` on or after 28 February, and a one-month span ending on the
    last day of a month. The result is never negative.

    Examples:
        >>> months_between(date(2024, 1, 15), date(2025, 1, 15))
        12
        >>> months_between(date(2024, 1, 15), date(2025, 1, 14))
        11
        >>> months_between(date(2024, 3, 31), date(2025, 4, 30))
        12
    """
    if end <= start:
        return 0
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if months < 1:
        return 0
    if end.month == 2 and end.day > 27:
        return months
    if end.day < start.day and not (months == 1 and _is_last_day_of_month(end)):
        months -= 1
    return months


def whole_years_between(start: date, end: date) -> int:
    """Count whole elapsed years from start to end."""
    return months_between(start, end) // 12


def format_currency_inr(amount: float, include_symbol: bool = True) -> str:
    """
    Format amount as Indian Rupees with lakh/crore comma separation.

    Args:
        amount: Amount to format
        include_symbol: Whether to include ₹ symbol

    Returns:
        Formatted string (e.g., '₹1,23,456.78')

    Examples:
        >>> format_currency_inr(123456.78)
        '₹1,23,456.78'
        >>> format_currency_inr(-1500, include_symbol=False)
        '-1,500.00'
    """
    sign = "-" if amount < 0 else ""
    whole, fraction = f"{abs(amount):.2f}".split(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    formatted = f"{sign}{whole}.{fraction}"
    if include_symbol:
        return f"{sign}₹{formatted.lstrip('-')}"
    return formatted

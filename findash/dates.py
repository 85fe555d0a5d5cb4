"""Date utilities for findash.

Pure functions for month windows, report periods and month labels.
Month windows are half-open: [first-of-month, first-of-next-month).
"""

import calendar
from datetime import date, datetime, timedelta

from findash.domain.models import Month

MONTH_ABBREVIATIONS: dict[str, tuple[str, ...]] = {
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    "pt-BR": (
        "jan.",
        "fev.",
        "mar.",
        "abr.",
        "mai.",
        "jun.",
        "jul.",
        "ago.",
        "set.",
        "out.",
        "nov.",
        "dez.",
    ),
}

REPORT_PERIODS = ("week", "month", "quarter", "year")


def parse_month(month: Month) -> tuple[int, int]:
    """Parse a YYYY-MM string.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (year, month).

    Raises:
        ValueError: If the string is not a valid month.
    """
    dt = datetime.strptime(month, "%Y-%m")
    return dt.year, dt.month


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    year, month_int = parse_month(month)
    start, end = month_window(year, month_int)
    label = f"{calendar.month_name[month_int]} {year}"
    return start.isoformat(), end.isoformat(), label


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move a (year, month) pair by a number of months.

    Args:
        year: Calendar year.
        month: Month number (1-12).
        offset: Months to move, negative to go back.

    Returns:
        Tuple of (year, month) after the shift.
    """
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_window(year: int, month: int) -> tuple[date, date]:
    """Half-open date window covering a calendar month.

    Args:
        year: Calendar year.
        month: Month number (1-12).

    Returns:
        Tuple of (first day of month, first day of next month).
    """
    next_year, next_month = shift_month(year, month, 1)
    return date(year, month, 1), date(next_year, next_month, 1)


def month_end(year: int, month: int) -> date:
    """Last calendar day of a month, used as an inclusive cutoff."""
    return date(year, month, calendar.monthrange(year, month)[1])


def trailing_months(today: date, count: int) -> list[tuple[int, int]]:
    """Months ending with today's month, oldest first.

    Args:
        today: Reference date.
        count: Number of months in the window.

    Returns:
        List of (year, month) pairs in chronological order.
    """
    return [shift_month(today.year, today.month, -offset) for offset in range(count - 1, -1, -1)]


def month_abbreviation(month: int, locale: str = "en") -> str:
    """Abbreviated month name for chart labels.

    Unknown locales fall back to English.
    """
    names = MONTH_ABBREVIATIONS.get(locale, MONTH_ABBREVIATIONS["en"])
    return names[month - 1]


def period_start(period: str, today: date) -> date:
    """First date included in a report period.

    Args:
        period: One of "week", "month", "quarter", "year".
        today: Reference date.

    Returns:
        Start date of the period (inclusive).

    Raises:
        ValueError: If the period name is unknown.
    """
    if period == "week":
        return today - timedelta(days=7)
    if period == "month":
        return date(today.year, today.month, 1)
    if period == "quarter":
        year, month = shift_month(today.year, today.month, -3)
        return date(year, month, 1)
    if period == "year":
        return date(today.year, 1, 1)
    raise ValueError(f"Unknown period '{period}'. Use one of: {', '.join(REPORT_PERIODS)}")

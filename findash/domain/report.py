"""Pure functions for period reports and transaction listings.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are Decimals (Money type).
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Generic, TypeVar

from findash.domain.categories import group_expenses_by_category, is_placeholder, sort_aggregates
from findash.domain.history import MonthlyTotals, monthly_income_expense
from findash.domain.ledger import total_expenses, total_income
from findash.domain.models import CategoryAggregate, Money, Transaction

T = TypeVar("T")

TYPE_FILTERS = ("all", "income", "expense")

CURRENCY_SYMBOLS = {
    "BRL": "R$",
    "GBP": "£",
    "USD": "$",
    "EUR": "€",
}


@dataclass(frozen=True)
class PeriodReport:
    """Immutable income/expense report for a period."""

    total_income: Money
    total_expenses: Money
    balance: Money
    monthly: list[MonthlyTotals]
    categories: list[CategoryAggregate]


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a paginated listing."""

    items: list[T]
    page: int
    per_page: int
    total_items: int
    total_pages: int


def build_period_report(
    transactions: Iterable[Transaction],
    sort_by: str = "value",
    locale: str = "en",
) -> PeriodReport:
    """Create a report from the transactions of a period.

    Args:
        transactions: Transactions already limited to the period.
        sort_by: Category order - "value" or "alpha".
        locale: Locale of month and category labels.

    Returns:
        PeriodReport with totals, monthly series and category totals. The
        category list is empty when the period has no expenses.
    """
    txns = list(transactions)
    income = total_income(txns)
    expenses = total_expenses(txns)

    aggregates = group_expenses_by_category(txns, locale)
    categories = [] if is_placeholder(aggregates) else sort_aggregates(aggregates, sort_by)

    return PeriodReport(
        total_income=income,
        total_expenses=expenses,
        balance=Money(income - expenses),
        monthly=monthly_income_expense(txns, locale),
        categories=categories,
    )


def matches_search(transaction: Transaction, search: str) -> bool:
    """Case-insensitive match on description, category name or account name."""
    needle = search.strip().lower()
    if not needle:
        return True

    haystacks = [
        transaction.description,
        transaction.category.name if transaction.category else None,
        transaction.account_name,
    ]
    return any(needle in text.lower() for text in haystacks if text)


def filter_transactions(
    transactions: Iterable[Transaction],
    search: str = "",
    type_filter: str = "all",
) -> list[Transaction]:
    """Filter transactions by search text and type.

    Args:
        transactions: Transactions to filter.
        search: Free text; empty matches everything.
        type_filter: "all", "income" or "expense".

    Returns:
        Matching transactions in their original order.

    Raises:
        ValueError: If the type filter is unknown.
    """
    if type_filter not in TYPE_FILTERS:
        raise ValueError(f"Unknown type filter '{type_filter}'. Use one of: {', '.join(TYPE_FILTERS)}")

    return [
        txn
        for txn in transactions
        if (type_filter == "all" or txn.type.value == type_filter) and matches_search(txn, search)
    ]


def paginate(items: list[T], page: int = 1, per_page: int = 10) -> Page[T]:
    """Slice a list into 1-based pages.

    Out-of-range pages return an empty item list rather than raising.
    """
    per_page = max(per_page, 1)
    total_pages = math.ceil(len(items) / per_page)
    start = (page - 1) * per_page
    page_items = items[start : start + per_page] if page >= 1 else []

    return Page(
        items=page_items,
        page=page,
        per_page=per_page,
        total_items=len(items),
        total_pages=total_pages,
    )


def format_money(amount: Decimal, currency: str = "BRL", include_sign: bool = False) -> str:
    """Format money amount for display.

    Args:
        amount: Amount in major units.
        currency: ISO currency code.
        include_sign: Whether to include + or - sign.

    Returns:
        Formatted string (e.g., "-R$ 1,234.50" or "£12.00").
    """
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), currency.upper() + " ")
    separator = " " if symbol == "R$" else ""
    formatted = f"{symbol}{separator}{abs(amount):,.2f}"

    if amount < 0:
        return f"-{formatted}"
    if include_sign:
        return f"+{formatted}"
    return formatted

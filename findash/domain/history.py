"""Pure functions for reconstructing balances over time.

Each balance point is a full replay of every transaction up to its cutoff.
That is O(months x transactions); the windows are a handful of months, so
the replay is kept instead of a running accumulator.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from findash.dates import month_abbreviation, month_end, trailing_months
from findash.domain.models import ZERO, BalancePoint, Money, Transaction, TransactionType

HISTORY_MONTHS = 4


@dataclass(frozen=True)
class MonthlyTotals:
    """Income and expenses for one calendar month."""

    month: str
    income: Money
    expenses: Money


def balance_as_of(transactions: Iterable[Transaction], cutoff: date) -> Money:
    """Income minus expenses over transactions dated on or before cutoff.

    Args:
        transactions: Transactions of any type and date.
        cutoff: Last date included.

    Returns:
        Running balance at the cutoff.
    """
    return Money(sum((t.signed_amount for t in transactions if t.date <= cutoff), ZERO))


def reconstruct_balance_history(
    transactions: Iterable[Transaction],
    today: date,
    months: int = HISTORY_MONTHS,
    locale: str = "en",
) -> list[BalancePoint]:
    """Running balance at the end of each trailing month.

    Args:
        transactions: All of the user's transactions.
        today: Reference date; its month is the last point.
        months: Number of points to produce.
        locale: Locale of the month labels.

    Returns:
        BalancePoints oldest first. With no transactions every point is zero.
    """
    txns = list(transactions)
    points: list[BalancePoint] = []

    for year, month in trailing_months(today, months):
        cutoff = month_end(year, month)
        points.append(
            BalancePoint(
                month=month_abbreviation(month, locale),
                balance=balance_as_of(txns, cutoff),
            )
        )

    return points


def monthly_income_expense(transactions: Iterable[Transaction], locale: str = "en") -> list[MonthlyTotals]:
    """Income and expense totals per calendar month, oldest first.

    Args:
        transactions: Transactions of any type and date.
        locale: Locale of the month labels.

    Returns:
        One MonthlyTotals per month that has transactions.
    """
    buckets: dict[tuple[int, int], tuple[Money, Money]] = {}

    for txn in transactions:
        key = (txn.date.year, txn.date.month)
        income, expenses = buckets.get(key, (ZERO, ZERO))
        if txn.type is TransactionType.INCOME:
            income = Money(income + txn.amount)
        else:
            expenses = Money(expenses + txn.amount)
        buckets[key] = (income, expenses)

    return [
        MonthlyTotals(month=month_abbreviation(month, locale), income=income, expenses=expenses)
        for (_, month), (income, expenses) in sorted(buckets.items())
    ]

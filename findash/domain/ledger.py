"""Pure functions for ledger totals.

This module contains the functional core for scalar aggregates:
- No I/O operations (no database, no console, no files)
- No side effects
- Every function is total over empty input and returns Decimal zero

All monetary amounts are Decimals (Money type).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from findash.domain.models import ZERO, Account, Money, Transaction, TransactionType


@dataclass(frozen=True)
class LedgerSummary:
    """Immutable scalar totals for the dashboard header."""

    total_balance: Money
    monthly_expenses: Money
    monthly_income: Money
    monthly_net: Money


def total_balance(accounts: Iterable[Account]) -> Money:
    """Sum account balances.

    Args:
        accounts: Accounts owned by the user.

    Returns:
        Exact sum of balances, zero when there are no accounts.
    """
    return Money(sum((account.balance for account in accounts), ZERO))


def in_period(transaction: Transaction, start: date, end: date) -> bool:
    """Check whether a transaction falls in the half-open window [start, end)."""
    return start <= transaction.date < end


def sum_by_type(transactions: Iterable[Transaction], txn_type: TransactionType) -> Money:
    """Sum amounts of transactions of one type."""
    return Money(sum((t.amount for t in transactions if t.type is txn_type), ZERO))


def total_income(transactions: Iterable[Transaction]) -> Money:
    """Sum of all income amounts."""
    return sum_by_type(transactions, TransactionType.INCOME)


def total_expenses(transactions: Iterable[Transaction]) -> Money:
    """Sum of all expense amounts."""
    return sum_by_type(transactions, TransactionType.EXPENSE)


def net_total(transactions: Iterable[Transaction]) -> Money:
    """Income minus expenses."""
    return Money(sum((t.signed_amount for t in transactions), ZERO))


def monthly_expenses(transactions: Iterable[Transaction], start: date, end: date) -> Money:
    """Sum expenses dated inside [start, end).

    Args:
        transactions: Transactions of any type.
        start: First day of the period (inclusive).
        end: First day after the period (exclusive).

    Returns:
        Exact sum of expense amounts in the window.
    """
    return total_expenses(t for t in transactions if in_period(t, start, end))


def summarize_ledger(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    start: date,
    end: date,
) -> LedgerSummary:
    """Compute balance and period totals in one pass over the inputs.

    Args:
        accounts: Accounts owned by the user.
        transactions: Transactions of any type and date.
        start: First day of the period (inclusive).
        end: First day after the period (exclusive).

    Returns:
        LedgerSummary for the period.
    """
    period = [t for t in transactions if in_period(t, start, end)]
    expenses = total_expenses(period)
    income = total_income(period)

    return LedgerSummary(
        total_balance=total_balance(accounts),
        monthly_expenses=expenses,
        monthly_income=income,
        monthly_net=Money(income - expenses),
    )

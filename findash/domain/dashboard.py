"""Pure assembly of the dashboard figures.

Takes the records already fetched by the store and combines the ledger,
category, history and goal calculations into one immutable structure.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from findash.dates import month_window
from findash.domain.categories import group_expenses_by_category
from findash.domain.goals import goals_progress
from findash.domain.history import HISTORY_MONTHS, reconstruct_balance_history
from findash.domain.ledger import monthly_expenses, total_balance
from findash.domain.models import Account, BalancePoint, CategoryAggregate, Goal, Money, Transaction


@dataclass(frozen=True)
class DashboardData:
    """Immutable dashboard figures for one render."""

    total_balance: Money
    monthly_expenses: Money
    goals_progress: Decimal
    recent_transactions: list[Transaction]
    expenses_by_category: list[CategoryAggregate]
    balance_history: list[BalancePoint]


def build_dashboard(
    accounts: list[Account],
    transactions: list[Transaction],
    goals: list[Goal],
    today: date,
    recent_limit: int = 5,
    history_months: int = HISTORY_MONTHS,
    locale: str = "en",
) -> DashboardData:
    """Compute every dashboard figure from raw records.

    Args:
        accounts: The user's accounts.
        transactions: The user's transactions, any order.
        goals: The user's goals.
        today: Reference date for the current month.
        recent_limit: Number of recent transactions to list.
        history_months: Number of balance history points.
        locale: Locale of month and category labels.

    Returns:
        DashboardData. Empty inputs give zeros, the category placeholder and
        a flat balance history.
    """
    start, end = month_window(today.year, today.month)
    current_month = [t for t in transactions if start <= t.date < end]
    recent = sorted(transactions, key=lambda t: (t.date, t.id), reverse=True)[: max(recent_limit, 0)]

    return DashboardData(
        total_balance=total_balance(accounts),
        monthly_expenses=monthly_expenses(transactions, start, end),
        goals_progress=goals_progress(goals),
        recent_transactions=recent,
        expenses_by_category=group_expenses_by_category(current_month, locale),
        balance_history=reconstruct_balance_history(transactions, today, history_months, locale),
    )

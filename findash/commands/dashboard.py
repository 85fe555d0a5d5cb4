"""Dashboard command: balance, monthly expenses, goals, categories and history."""

import sqlite3
import sys
from datetime import date

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from findash.config import Settings, load_settings
from findash.dates import month_end
from findash.domain.categories import calculate_histogram_bar_length, category_share, is_placeholder
from findash.domain.dashboard import DashboardData, build_dashboard
from findash.domain.models import Money, TransactionType, UserId
from findash.domain.report import format_money
from findash.logging_setup import get_logger
from findash.store.queries import get_accounts, get_goals, get_transactions
from findash.store.schema import get_db_path

console = Console()
logger = get_logger(__name__)

BAR_WIDTH = 30


def render_summary(data: DashboardData, settings: Settings, today: date) -> None:
    """Render the three headline figures."""
    currency = settings.currency
    table = Table.grid(padding=(0, 4))
    table.add_column()
    table.add_column()
    table.add_column()
    table.add_row(
        "[bold]Total balance[/bold]",
        "[bold]Expenses this month[/bold]",
        "[bold]Goals progress[/bold]",
    )
    balance_style = "green" if data.total_balance >= 0 else "red"
    table.add_row(
        f"[{balance_style}]{format_money(data.total_balance, currency)}[/{balance_style}]",
        f"[red]{format_money(data.monthly_expenses, currency)}[/red]",
        f"[cyan]{data.goals_progress:.1f}%[/cyan]",
    )
    console.print(Panel(table, title=f"Dashboard - {today.strftime('%B %Y')}", expand=False))


def render_recent(data: DashboardData, settings: Settings) -> None:
    """Render the most recent transactions."""
    if not data.recent_transactions:
        console.print("[dim]No transactions yet[/dim]")
        return

    table = Table(title="Recent transactions")
    table.add_column("Date", style="cyan")
    table.add_column("Description")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")

    for txn in data.recent_transactions:
        amount = format_money(txn.signed_amount, settings.currency, include_sign=True)
        style = "green" if txn.type is TransactionType.INCOME else "red"
        table.add_row(
            txn.date.isoformat(),
            txn.description or "[dim]-[/dim]",
            txn.category.name if txn.category else "[dim]-[/dim]",
            f"[{style}]{amount}[/{style}]",
        )

    console.print(table)


def render_categories(data: DashboardData, settings: Settings) -> None:
    """Render expenses by category with histogram bars."""
    aggregates = data.expenses_by_category
    table = Table(title="Expenses by category")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right")
    table.add_column("")

    if is_placeholder(aggregates):
        placeholder = aggregates[0]
        table.add_row(f"[{placeholder.color}]{placeholder.name}[/{placeholder.color}]", "-", "-", "")
        console.print(table)
        return

    total = Money(sum(a.amount for a in aggregates))
    max_amount = max(a.amount for a in aggregates)

    for aggregate in sorted(aggregates, key=lambda a: a.amount, reverse=True):
        bar = "█" * calculate_histogram_bar_length(aggregate.amount, max_amount, BAR_WIDTH)
        table.add_row(
            aggregate.name,
            format_money(aggregate.amount, settings.currency),
            f"{category_share(aggregate.amount, total):.0f}%",
            f"[{aggregate.color}]{bar}[/{aggregate.color}]",
        )

    console.print(table)


def render_history(data: DashboardData, settings: Settings) -> None:
    """Render the balance history as a small bar chart."""
    table = Table(title="Balance history")
    table.add_column("Month", style="cyan")
    table.add_column("Balance", justify="right")
    table.add_column("")

    max_abs = max((abs(point.balance) for point in data.balance_history), default=Money(0))

    for point in data.balance_history:
        style = "green" if point.balance >= 0 else "red"
        bar = "█" * calculate_histogram_bar_length(point.balance, Money(max_abs), BAR_WIDTH)
        table.add_row(
            point.month,
            f"[{style}]{format_money(point.balance, settings.currency)}[/{style}]",
            f"[{style}]{bar}[/{style}]",
        )

    console.print(table)


def dashboard_command(user: str | None = None) -> None:
    """Show the dashboard for a user."""
    settings = load_settings()
    user_id = UserId(user or settings.user_id)
    db_path = get_db_path()
    today = date.today()

    try:
        accounts = get_accounts(user_id, db_path)
        transactions = get_transactions(
            user_id,
            until_inclusive=month_end(today.year, today.month),
            db_path=db_path,
        )
        goals = get_goals(user_id, db_path)
    except sqlite3.Error as e:
        logger.error("Could not load dashboard data: %s", e)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    logger.debug(
        "Loaded %d accounts, %d transactions, %d goals for %s",
        len(accounts),
        len(transactions),
        len(goals),
        user_id,
    )

    data = build_dashboard(
        accounts,
        transactions,
        goals,
        today,
        recent_limit=settings.recent_transactions,
        history_months=settings.history_months,
        locale=settings.locale,
    )

    render_summary(data, settings, today)
    render_recent(data, settings)
    render_categories(data, settings)
    render_history(data, settings)

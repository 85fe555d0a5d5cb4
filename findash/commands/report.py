"""Report command for income and spending over a period."""

import sqlite3
import sys
from datetime import date

from rich.console import Console
from rich.table import Table

from findash.config import load_settings
from findash.dates import period_start
from findash.domain.categories import calculate_histogram_bar_length, category_share
from findash.domain.models import UserId
from findash.domain.report import PeriodReport, build_period_report, format_money
from findash.logging_setup import get_logger
from findash.store.queries import get_transactions
from findash.store.schema import get_db_path

console = Console()
logger = get_logger(__name__)

PERIOD_LABELS = {
    "week": "Last 7 days",
    "month": "This month",
    "quarter": "Last 3 months",
    "year": "This year",
}


def render_totals(report: PeriodReport, currency: str, period_label: str) -> None:
    """Render income, expenses and balance."""
    console.print(f"\n[bold cyan]{period_label}[/bold cyan]\n")
    console.print(f"  Income:   [green]{format_money(report.total_income, currency)}[/green]")
    console.print(f"  Expenses: [red]{format_money(report.total_expenses, currency)}[/red]")
    style = "green" if report.balance >= 0 else "red"
    console.print(f"  Balance:  [{style}]{format_money(report.balance, currency)}[/{style}]\n")


def render_monthly(report: PeriodReport, currency: str) -> None:
    """Render the income/expense series per month."""
    if not report.monthly:
        return

    table = Table(title="By month")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expenses", justify="right", style="red")

    for totals in report.monthly:
        table.add_row(totals.month, format_money(totals.income, currency), format_money(totals.expenses, currency))

    console.print(table)


def render_categories(report: PeriodReport, currency: str, histogram: bool, bar_width: int = 30) -> None:
    """Render expense totals per category."""
    if not report.categories:
        console.print("[dim]No expenses in this period[/dim]")
        return

    max_amount = max(c.amount for c in report.categories)

    console.print("[bold]Expenses by category:[/bold]")
    for aggregate in report.categories:
        amount_display = format_money(aggregate.amount, currency)
        share = category_share(aggregate.amount, report.total_expenses)
        if histogram:
            bar = "█" * calculate_histogram_bar_length(aggregate.amount, max_amount, bar_width)
            console.print(f"  {aggregate.name:20} {amount_display:>14} {share:5.1f}% [{aggregate.color}]{bar}[/]")
        else:
            console.print(f"  {aggregate.name}: {amount_display} ({share:.1f}%)")


def report_command(
    period: str = "month",
    sort_by: str = "value",
    histogram: bool = True,
    user: str | None = None,
) -> None:
    """Show income and spending for a period."""
    settings = load_settings()
    user_id = UserId(user or settings.user_id)
    db_path = get_db_path()

    try:
        since = period_start(period, date.today())
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    if sort_by not in ("value", "alpha"):
        console.print("[red]Sort must be 'value' or 'alpha'[/red]", style="bold")
        sys.exit(1)

    try:
        transactions = get_transactions(user_id, since=since, newest_first=False, db_path=db_path)
    except sqlite3.Error as e:
        logger.error("Could not load transactions since %s: %s", since, e)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    logger.debug("Building %s report from %d transactions", period, len(transactions))

    report = build_period_report(transactions, sort_by, settings.locale)

    render_totals(report, settings.currency, PERIOD_LABELS[period])
    render_monthly(report, settings.currency)
    render_categories(report, settings.currency, histogram)

"""CLI entry point for findash."""

import typer

from findash.commands.admin import (
    account_add_command,
    account_list_command,
    account_set_balance_command,
    backup_command,
    category_add_command,
    category_list_command,
    init_command,
)
from findash.commands.dashboard import dashboard_command
from findash.commands.goals import goal_add_command, goal_contribute_command, goal_list_command
from findash.commands.report import report_command
from findash.commands.simulate import simulate_command
from findash.commands.transactions import add_command, import_command, list_command
from findash.logging_setup import configure_logging

app = typer.Typer(
    name="findash",
    help="Personal finance dashboard - balances, spending, goals and projections",
    add_completion=False,
)
account_app = typer.Typer(help="Manage your accounts.")
category_app = typer.Typer(help="Manage your income and expense categories.")
goal_app = typer.Typer(help="Manage your savings goals.")

app.add_typer(account_app, name="account")
app.add_typer(category_app, name="category")
app.add_typer(goal_app, name="goal")

USER_OPTION = typer.Option(None, "--user", "-u", help="User id (default: user_id from config)")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Personal finance dashboard - balances, spending, goals and projections."""
    configure_logging("DEBUG" if verbose else None)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize findash database and configuration."""
    init_command(force)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: ~/.findash/backups)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command(name="dashboard")
def dashboard(user: str = USER_OPTION) -> None:
    """Show your balance, this month's spending, goals and balance history."""
    dashboard_command(user)


@app.command(name="add")
def add(
    txn_type: str = typer.Argument(..., metavar="TYPE", help="'income' or 'expense'"),
    amount: str = typer.Argument(..., help="Amount (always positive)"),
    category: str = typer.Option(None, "--category", "-c", help="Category name"),
    account: str = typer.Option(None, "--account", "-a", help="Account name"),
    description: str = typer.Option(None, "--description", "-d", help="Description"),
    txn_date: str = typer.Option(None, "--date", help="Date (default: today)"),
    recurring: bool = typer.Option(False, "--recurring", help="Mark as recurring"),
    frequency: str = typer.Option(None, "--frequency", help="weekly, monthly or yearly"),
    user: str = USER_OPTION,
) -> None:
    """Add an income or expense transaction."""
    add_command(txn_type, amount, category, account, description, txn_date, recurring, frequency, user)


@app.command(name="import")
def import_csv(
    csv_file: str,
    txn_type: str = typer.Option("auto", "--type", help="'income', 'expense' or 'auto' (sign decides)"),
    user: str = USER_OPTION,
) -> None:
    """Import transactions from a CSV file."""
    import_command(csv_file, txn_type, user)


@app.command(name="list")
def list_transactions(
    search: str = typer.Option("", "--search", "-s", help="Search description, category or account"),
    type_filter: str = typer.Option("all", "--type", help="'all', 'income' or 'expense'"),
    page: int = typer.Option(1, "--page", help="Page number"),
    per_page: int = typer.Option(10, "--per-page", help="Transactions per page"),
    user: str = USER_OPTION,
) -> None:
    """List your transactions."""
    list_command(search, type_filter, page, per_page, user)


@app.command(name="report")
def report(
    period: str = typer.Option("month", "--period", "-p", help="week, month, quarter or year"),
    sort_by: str = typer.Option("value", help="Sort by 'value' or 'alpha'"),
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
    user: str = USER_OPTION,
) -> None:
    """Show your income and spending breakdown."""
    report_command(period, sort_by, histogram, user)


@app.command(name="simulate")
def simulate(
    initial: str = typer.Option(None, "--initial", help="Initial amount"),
    monthly: str = typer.Option(None, "--monthly", help="Monthly contribution"),
    rate: str = typer.Option(None, "--rate", help="Annual return rate in percent"),
    months: int = typer.Option(None, "--months", help="Investment period in months"),
    contribute_at_start: bool = typer.Option(
        False, "--contribute-at-start", help="Add each contribution before that month's interest"
    ),
) -> None:
    """Project an investment against the conservative baseline."""
    simulate_command(initial, monthly, rate, months, contribute_at_start)


@account_app.command(name="add")
def account_add(
    name: str,
    balance: str = typer.Option("0", "--balance", "-b", help="Opening balance"),
    user: str = USER_OPTION,
) -> None:
    """Create an account."""
    account_add_command(name, balance, user)


@account_app.command(name="set-balance")
def account_set_balance(name: str, balance: str, user: str = USER_OPTION) -> None:
    """Set an account's balance."""
    account_set_balance_command(name, balance, user)


@account_app.command(name="list")
def account_list(user: str = USER_OPTION) -> None:
    """List your accounts."""
    account_list_command(user)


@category_app.command(name="add")
def category_add(
    name: str,
    txn_type: str = typer.Option(..., "--type", "-t", help="'income' or 'expense'"),
    color: str = typer.Option("#6B7280", "--color", help="Hex colour"),
    icon: str = typer.Option(None, "--icon", help="Icon name"),
    user: str = USER_OPTION,
) -> None:
    """Create a category."""
    category_add_command(name, txn_type, color, icon, user)


@category_app.command(name="list")
def category_list(
    txn_type: str = typer.Option(None, "--type", "-t", help="'income' or 'expense'"),
    user: str = USER_OPTION,
) -> None:
    """List your categories."""
    category_list_command(txn_type, user)


@goal_app.command(name="add")
def goal_add(
    name: str,
    target: str = typer.Option(..., "--target", help="Target amount"),
    current: str = typer.Option("0", "--current", help="Amount already saved"),
    monthly: str = typer.Option("0", "--monthly", help="Monthly contribution"),
    target_date: str = typer.Option(None, "--target-date", help="Target date (YYYY-MM-DD)"),
    user: str = USER_OPTION,
) -> None:
    """Create a savings goal."""
    goal_add_command(name, target, current, monthly, target_date, user)


@goal_app.command(name="list")
def goal_list(user: str = USER_OPTION) -> None:
    """List your goals and their progress."""
    goal_list_command(user)


@goal_app.command(name="contribute")
def goal_contribute(goal_id: int, amount: str, user: str = USER_OPTION) -> None:
    """Add money to a goal."""
    goal_contribute_command(goal_id, amount, user)


if __name__ == "__main__":
    app()

"""Admin commands: init, backup, accounts and categories."""

import re
import shutil
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.table import Table

from findash.config import create_default_config, get_config_path, load_settings
from findash.domain.categories import FALLBACK_CATEGORY_COLOR
from findash.domain.ledger import total_balance
from findash.domain.models import TransactionType, UserId
from findash.domain.report import format_money
from findash.domain.validation import parse_money
from findash.logging_setup import get_logger
from findash.store.queries import (
    get_account_by_name,
    get_accounts,
    get_categories,
    insert_account,
    insert_category,
    update_account_balance,
)
from findash.store.schema import get_db_path, init_database

console = Console()
logger = get_logger(__name__)

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def backup_command(
    output_dir: str | None = None,
) -> None:
    """Backup database and configuration files."""
    db_path = get_db_path()
    config_path = get_config_path()

    if not db_path.exists():
        console.print("[red]Database not found. Run 'findash init' first.[/red]", style="bold")
        sys.exit(1)

    if not config_path.exists():
        console.print("[red]Config not found. Run 'findash init' first.[/red]", style="bold")
        sys.exit(1)

    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = Path.home() / ".findash" / "backups"

    backup_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    db_backup = backup_dir / f"findash_{timestamp}.db"
    config_backup = backup_dir / f"config_{timestamp}.toml"

    try:
        shutil.copy2(db_path, db_backup)
        console.print(f"[green]✓[/green] Database backed up to: {db_backup}")

        shutil.copy2(config_path, config_backup)
        console.print(f"[green]✓[/green] Config backed up to: {config_backup}")

        console.print("\n[green]Backup complete![/green]", style="bold")
        console.print(f"[dim]Backup directory: {backup_dir}[/dim]")

    except OSError as e:
        logger.error("Backup to %s failed: %s", backup_dir, e)
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)


def init_command(force: bool = False) -> None:
    """Initialize findash database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'findash init --force' to overwrite the config[/yellow]")
            sys.exit(1)

        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        init_database(db_path)
        console.print("[green]✓[/green] Database initialized")

        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        console.print("\n[green]Initialization complete![/green]", style="bold")
        console.print(f"[dim]Database: {db_path}[/dim]")
        console.print(f"[dim]Config: {config_path}[/dim]")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def account_add_command(name: str, balance: str = "0", user: str | None = None) -> None:
    """Create an account with an opening balance."""
    user_id = UserId(user or load_settings().user_id)

    try:
        opening = parse_money(balance)
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    try:
        account_id = insert_account(user_id, name, opening, get_db_path())
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Account '{name}' created (ID: {account_id})")


def account_set_balance_command(name: str, balance: str, user: str | None = None) -> None:
    """Overwrite the balance of an existing account."""
    user_id = UserId(user or load_settings().user_id)
    db_path = get_db_path()

    try:
        new_balance = parse_money(balance)
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    try:
        account = get_account_by_name(user_id, name, db_path)
        if account is None:
            console.print(f"[red]Account '{name}' not found[/red]", style="bold")
            sys.exit(1)
        update_account_balance(account.id, new_balance, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] '{account.name}' balance set to {new_balance}")


def account_list_command(user: str | None = None) -> None:
    """List accounts and their total."""
    settings = load_settings()
    user_id = UserId(user or settings.user_id)

    try:
        accounts = get_accounts(user_id, get_db_path())
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not accounts:
        console.print("[yellow]No accounts yet[/yellow]")
        return

    table = Table(title="Accounts")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Balance", justify="right")

    for account in accounts:
        style = "green" if account.balance >= 0 else "red"
        table.add_row(str(account.id), account.name, f"[{style}]{format_money(account.balance, settings.currency)}[/]")

    table.add_section()
    table.add_row("", "[bold]Total[/bold]", f"[bold]{format_money(total_balance(accounts), settings.currency)}[/bold]")
    console.print(table)


def category_add_command(
    name: str,
    txn_type: str,
    color: str = FALLBACK_CATEGORY_COLOR,
    icon: str | None = None,
    user: str | None = None,
) -> None:
    """Create an income or expense category."""
    user_id = UserId(user or load_settings().user_id)

    try:
        parsed_type = TransactionType(txn_type.lower())
    except ValueError:
        console.print("[red]Type must be 'income' or 'expense'[/red]", style="bold")
        sys.exit(1)

    if not _HEX_COLOR.match(color):
        console.print("[red]Colour must be a hex value such as #3B82F6[/red]", style="bold")
        sys.exit(1)

    try:
        category_id = insert_category(user_id, name, parsed_type, color, icon, get_db_path())
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] {parsed_type.value.capitalize()} category '{name}' created (ID: {category_id})")


def category_list_command(txn_type: str | None = None, user: str | None = None) -> None:
    """List categories, optionally of one type."""
    user_id = UserId(user or load_settings().user_id)

    try:
        parsed_type = TransactionType(txn_type.lower()) if txn_type else None
    except ValueError:
        console.print("[red]Type must be 'income' or 'expense'[/red]", style="bold")
        sys.exit(1)

    try:
        categories = get_categories(user_id, parsed_type, get_db_path())
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not categories:
        console.print("[yellow]No categories yet[/yellow]")
        return

    table = Table(title="Categories")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Icon", style="dim")

    for category in categories:
        table.add_row(
            str(category.id),
            f"[{category.color}]{category.name}[/]",
            category.type.value,
            category.icon or "",
        )

    console.print(table)

"""Transaction commands: add, import and list."""

import csv
import sqlite3
import sys
from datetime import date
from pathlib import Path

import pandas as pd
from rich.console import Console
from rich.table import Table

from findash.config import load_settings
from findash.domain.models import Frequency, TransactionType, UserId
from findash.domain.report import TYPE_FILTERS, filter_transactions, format_money, paginate
from findash.domain.transactions import CsvMapping, ParsedTransaction, analyze_csv_columns, parse_csv_transaction
from findash.domain.validation import (
    parse_money,
    validate_amount,
    validate_frequency,
    validate_transaction_category,
)
from findash.logging_setup import get_logger
from findash.store.queries import (
    get_account_by_name,
    get_category_by_name,
    get_transactions,
    insert_transaction,
)
from findash.store.schema import get_db_path

console = Console()
logger = get_logger(__name__)


def normalize_date(raw_date: str) -> date:
    """Parse a date string in any common format.

    Uses pandas.to_datetime, which handles ISO, European and American
    formats. Day-first is assumed for ambiguous dates.

    Raises:
        ValueError: If date cannot be parsed.
    """
    try:
        return pd.to_datetime(raw_date, dayfirst=True).date()
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e


def _parse_type(txn_type: str) -> TransactionType:
    try:
        return TransactionType(txn_type.lower())
    except ValueError:
        console.print(f"[red]Type must be 'income' or 'expense', got '{txn_type}'[/red]", style="bold")
        sys.exit(1)


def add_command(
    txn_type: str,
    amount: str,
    category: str | None = None,
    account: str | None = None,
    description: str | None = None,
    txn_date: str | None = None,
    recurring: bool = False,
    frequency: str | None = None,
    user: str | None = None,
) -> None:
    """Add a transaction after validating it."""
    settings = load_settings()
    user_id = UserId(user or settings.user_id)
    db_path = get_db_path()
    parsed_type = _parse_type(txn_type)

    try:
        parsed_amount = parse_money(amount)
        parsed_date = normalize_date(txn_date) if txn_date else date.today()
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        console.print("[dim]Accepted date formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)

    for is_valid, error in (validate_amount(parsed_amount), validate_frequency(recurring, frequency)):
        if not is_valid:
            console.print(f"[red]{error}[/red]", style="bold")
            sys.exit(1)

    try:
        category_record = None
        if category:
            category_record = get_category_by_name(user_id, category, parsed_type, db_path)
            if category_record is None:
                console.print(f"[red]Category '{category}' not found[/red]", style="bold")
                console.print("[dim]Create it with 'findash category add'[/dim]")
                sys.exit(1)

        is_valid, error = validate_transaction_category(parsed_type, category_record)
        if not is_valid:
            console.print(f"[red]{error}[/red]", style="bold")
            sys.exit(1)

        account_record = None
        if account:
            account_record = get_account_by_name(user_id, account, db_path)
            if account_record is None:
                console.print(f"[red]Account '{account}' not found[/red]", style="bold")
                sys.exit(1)

        txn_id = insert_transaction(
            user_id,
            parsed_type,
            parsed_amount,
            parsed_date,
            category_id=category_record.id if category_record else None,
            account_id=account_record.id if account_record else None,
            description=description,
            recurring=recurring,
            frequency=Frequency(frequency) if recurring and frequency else None,
            db_path=db_path,
        )
    except sqlite3.Error as e:
        logger.error("Could not insert transaction: %s", e)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    logger.info("Inserted %s transaction %d for %s", parsed_type.value, txn_id, user_id)

    console.print("[green]✓[/green] Transaction added:")
    console.print(f"  Date: {parsed_date.isoformat()}")
    console.print(f"  Type: {parsed_type.value}")
    console.print(f"  Amount: {format_money(parsed_amount, settings.currency)}")
    if category_record:
        console.print(f"  Category: {category_record.name}")
    if recurring:
        console.print(f"  Repeats: {frequency}")


def insert_parsed_transactions(
    user_id: UserId,
    parsed: list[ParsedTransaction],
    db_path: Path,
) -> tuple[int, int]:
    """Insert parsed rows, resolving category names per type.

    Rows whose category does not exist for their type are inserted
    uncategorised.

    Returns:
        Tuple of (inserted, uncategorised).
    """
    inserted = 0
    uncategorised = 0

    for entry in parsed:
        category_id = None
        if entry.category:
            category = get_category_by_name(user_id, entry.category, entry.type, db_path)
            if category is not None and category.type is entry.type:
                category_id = category.id
            else:
                uncategorised += 1

        insert_transaction(
            user_id,
            entry.type,
            entry.amount,
            entry.date,
            category_id=category_id,
            description=entry.description,
            db_path=db_path,
        )
        inserted += 1

    return inserted, uncategorised


def import_command(csv_file: str, txn_type: str = "auto", user: str | None = None) -> None:
    """Import transactions from a CSV file."""
    settings = load_settings()
    user_id = UserId(user or settings.user_id)
    db_path = get_db_path()
    csv_path = Path(csv_file).expanduser()
    forced_type = None if txn_type == "auto" else _parse_type(txn_type)

    try:
        console.print(f"[cyan]Reading CSV file: {csv_path}...[/cyan]")
        with open(csv_path, encoding="utf-8") as f:
            reader = csv.DictReader(f)
            csv_rows = list(reader)

        if not csv_rows:
            console.print("[yellow]No transactions found in CSV[/yellow]")
            return

        headers = list(csv_rows[0].keys())
        suggested = analyze_csv_columns(headers)

        missing = [key for key in ("date", "amount") if not suggested[key]]
        if missing:
            console.print(f"[red]Could not detect {', '.join(missing)} column(s) in: {', '.join(headers)}[/red]")
            sys.exit(1)

        mapping = CsvMapping(
            date_column=suggested["date"],
            description_column=suggested["description"],
            amount_column=suggested["amount"],
            category_column=suggested["category"],
        )

        parsed: list[ParsedTransaction] = []
        parse_errors = 0
        for row_num, row in enumerate(csv_rows, start=2):  # start=2 because row 1 is header
            try:
                entry = parse_csv_transaction(row, mapping, normalize_date, forced_type)
                if entry:
                    parsed.append(entry)
            except ValueError as e:
                parse_errors += 1
                console.print(f"[yellow]Row {row_num}: {e}[/yellow]")

        if parse_errors > 0:
            console.print(f"[yellow]Skipped {parse_errors} rows with date parsing errors[/yellow]")

        inserted, uncategorised = insert_parsed_transactions(user_id, parsed, db_path)

    except FileNotFoundError:
        console.print(f"[red]File not found: {csv_path}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        logger.error("Import from %s failed: %s", csv_path, e)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    logger.info("Imported %d rows from %s", inserted, csv_path)

    console.print(f"[green]Successfully imported {inserted} transactions![/green]", style="bold")
    if uncategorised:
        console.print(f"[dim]{uncategorised} rows had unknown categories and were left uncategorised[/dim]")


def list_command(
    search: str = "",
    type_filter: str = "all",
    page: int = 1,
    per_page: int = 10,
    user: str | None = None,
) -> None:
    """List transactions with search, type filter and pagination."""
    settings = load_settings()
    user_id = UserId(user or settings.user_id)

    if type_filter not in TYPE_FILTERS:
        console.print(f"[red]Type must be one of: {', '.join(TYPE_FILTERS)}[/red]", style="bold")
        sys.exit(1)

    try:
        transactions = get_transactions(user_id, db_path=get_db_path())
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    matching = filter_transactions(transactions, search, type_filter)
    result = paginate(matching, page, per_page)

    if not result.items:
        console.print("[yellow]No transactions found[/yellow]")
        return

    table = Table(title=f"Transactions ({result.total_items}) - page {result.page} of {result.total_pages}")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Account", style="dim")
    table.add_column("Amount", justify="right")
    table.add_column("Repeats", justify="center")

    for txn in result.items:
        amount = format_money(txn.signed_amount, settings.currency, include_sign=True)
        style = "green" if txn.type is TransactionType.INCOME else "red"
        table.add_row(
            txn.date.isoformat(),
            txn.description or "[dim]-[/dim]",
            txn.category.name if txn.category else "[dim]-[/dim]",
            txn.account_name or "[dim]-[/dim]",
            f"[{style}]{amount}[/{style}]",
            txn.frequency.value if txn.frequency else "",
        )

    console.print(table)

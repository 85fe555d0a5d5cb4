"""Database query functions.

Every read is scoped to a user id. Rows are converted into the immutable
domain records before they leave this module.
"""

import sqlite3
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

from findash.domain.models import (
    Account,
    Category,
    CategoryName,
    Frequency,
    Goal,
    Money,
    Transaction,
    TransactionType,
    UserId,
)
from findash.store.schema import get_db_path

_TRANSACTION_SELECT = """
    SELECT t.id, t.user_id, t.type, t.amount, t.date, t.description,
           t.recurring, t.recurring_frequency,
           c.id AS category_id, c.name AS category_name, c.type AS category_type,
           c.color AS category_color, c.icon AS category_icon,
           a.name AS account_name
    FROM transactions t
    LEFT JOIN categories c ON c.id = t.category_id
    LEFT JOIN accounts a ON a.id = t.account_id
    WHERE t.user_id = ?
"""


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _money(value: Any) -> Money:
    return Money(Decimal(str(value)))


def _insert(query: str, params: tuple[Any, ...], db_path: Path | None) -> int:
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(query, params)
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def _update(query: str, params: tuple[Any, ...], db_path: Path | None) -> bool:
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(query, params)
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def row_to_account(row: sqlite3.Row) -> Account:
    """Convert an accounts row into an Account."""
    return Account(
        id=row["id"],
        user_id=UserId(row["user_id"]),
        name=row["name"],
        balance=_money(row["balance"]),
    )


def row_to_category(row: sqlite3.Row) -> Category:
    """Convert a categories row into a Category."""
    return Category(
        id=row["id"],
        user_id=UserId(row["user_id"]),
        name=CategoryName(row["name"]),
        type=TransactionType(row["type"]),
        color=row["color"],
        icon=row["icon"],
    )


def row_to_transaction(row: sqlite3.Row) -> Transaction:
    """Convert a joined transactions row into a Transaction."""
    category = None
    if row["category_id"] is not None:
        category = Category(
            id=row["category_id"],
            user_id=UserId(row["user_id"]),
            name=CategoryName(row["category_name"]),
            type=TransactionType(row["category_type"]),
            color=row["category_color"],
            icon=row["category_icon"],
        )

    frequency = row["recurring_frequency"]

    return Transaction(
        id=row["id"],
        user_id=UserId(row["user_id"]),
        type=TransactionType(row["type"]),
        amount=_money(row["amount"]),
        date=date.fromisoformat(row["date"]),
        category=category,
        account_name=row["account_name"],
        description=row["description"],
        recurring=bool(row["recurring"]),
        frequency=Frequency(frequency) if frequency else None,
    )


def row_to_goal(row: sqlite3.Row) -> Goal:
    """Convert a goals row into a Goal."""
    target_date = row["target_date"]
    return Goal(
        id=row["id"],
        user_id=UserId(row["user_id"]),
        name=row["name"],
        target_amount=_money(row["target_amount"]),
        current_amount=_money(row["current_amount"]),
        monthly_contribution=_money(row["monthly_contribution"]),
        target_date=date.fromisoformat(target_date) if target_date else None,
    )


def insert_account(user_id: UserId, name: str, balance: Money, db_path: Path | None = None) -> int:
    """Insert an account.

    Args:
        user_id: Owning user.
        name: Account name.
        balance: Opening balance.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new account.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _insert(
        "INSERT INTO accounts (user_id, name, balance) VALUES (?, ?, ?)",
        (user_id, name, str(balance)),
        db_path,
    )


def get_accounts(user_id: UserId, db_path: Path | None = None) -> list[Account]:
    """Get all accounts of a user ordered by name.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id, user_id, name, balance FROM accounts WHERE user_id = ? ORDER BY name", (user_id,))
        return [row_to_account(row) for row in cursor.fetchall()]


def get_account_by_name(user_id: UserId, name: str, db_path: Path | None = None) -> Account | None:
    """Get a user's account by case-insensitive name.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT id, user_id, name, balance FROM accounts WHERE user_id = ? AND lower(name) = lower(?)",
            (user_id, name),
        )
        row = cursor.fetchone()
        return row_to_account(row) if row else None


def update_account_balance(account_id: int, balance: Money, db_path: Path | None = None) -> bool:
    """Set the balance of an account.

    Returns:
        True if the account exists and was updated.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _update("UPDATE accounts SET balance = ? WHERE id = ?", (str(balance), account_id), db_path)


def insert_category(
    user_id: UserId,
    name: str,
    txn_type: TransactionType,
    color: str,
    icon: str | None = None,
    db_path: Path | None = None,
) -> int:
    """Insert a category.

    Args:
        user_id: Owning user.
        name: Display name.
        txn_type: Transaction type the category applies to.
        color: Display colour (hex).
        icon: Optional icon name.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new category.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _insert(
        "INSERT INTO categories (user_id, name, type, color, icon) VALUES (?, ?, ?, ?, ?)",
        (user_id, name, txn_type.value, color, icon),
        db_path,
    )


def get_categories(
    user_id: UserId,
    txn_type: TransactionType | None = None,
    db_path: Path | None = None,
) -> list[Category]:
    """Get a user's categories, optionally restricted to one type.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = "SELECT id, user_id, name, type, color, icon FROM categories WHERE user_id = ?"
        params: list[Any] = [user_id]

        if txn_type is not None:
            query += " AND type = ?"
            params.append(txn_type.value)

        query += " ORDER BY type, name"

        cursor.execute(query, params)
        return [row_to_category(row) for row in cursor.fetchall()]


def get_category_by_name(
    user_id: UserId,
    name: str,
    txn_type: TransactionType | None = None,
    db_path: Path | None = None,
) -> Category | None:
    """Get a user's category by case-insensitive name.

    When a type is given, a category of that type is preferred.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    matches = [c for c in get_categories(user_id, db_path=db_path) if c.name.lower() == name.lower()]
    if txn_type is not None:
        typed = [c for c in matches if c.type is txn_type]
        if typed:
            return typed[0]
    return matches[0] if matches else None


def insert_transaction(
    user_id: UserId,
    txn_type: TransactionType,
    amount: Money,
    txn_date: date,
    category_id: int | None = None,
    account_id: int | None = None,
    description: str | None = None,
    recurring: bool = False,
    frequency: Frequency | None = None,
    db_path: Path | None = None,
) -> int:
    """Insert a transaction.

    Args:
        user_id: Owning user.
        txn_type: Income or expense.
        amount: Non-negative amount.
        txn_date: Calendar date of the transaction.
        category_id: Optional category reference.
        account_id: Optional account reference.
        description: Optional description.
        recurring: Whether the transaction recurs.
        frequency: Recurrence frequency when recurring.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new transaction.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _insert(
        """
        INSERT INTO transactions
            (user_id, type, amount, date, category_id, account_id, description, recurring, recurring_frequency)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            user_id,
            txn_type.value,
            str(amount),
            txn_date.isoformat(),
            category_id,
            account_id,
            description,
            int(recurring),
            frequency.value if recurring and frequency else None,
        ),
        db_path,
    )


def get_transactions(
    user_id: UserId,
    txn_type: TransactionType | None = None,
    since: date | None = None,
    until: date | None = None,
    until_inclusive: date | None = None,
    limit: int | None = None,
    newest_first: bool = True,
    db_path: Path | None = None,
) -> list[Transaction]:
    """Get a user's transactions with category and account joined.

    Args:
        user_id: Owning user.
        txn_type: Optional type filter.
        since: Optional first date (inclusive).
        until: Optional end date (exclusive).
        until_inclusive: Optional last date (inclusive).
        limit: Maximum number of rows. If None, returns all.
        newest_first: Order by date descending when True, ascending otherwise.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of Transaction records.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = _TRANSACTION_SELECT
        params: list[Any] = [user_id]

        if txn_type is not None:
            query += " AND t.type = ?"
            params.append(txn_type.value)
        if since is not None:
            query += " AND t.date >= ?"
            params.append(since.isoformat())
        if until is not None:
            query += " AND t.date < ?"
            params.append(until.isoformat())
        if until_inclusive is not None:
            query += " AND t.date <= ?"
            params.append(until_inclusive.isoformat())

        order = "DESC" if newest_first else "ASC"
        query += f" ORDER BY t.date {order}, t.id {order}"

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        cursor.execute(query, params)
        return [row_to_transaction(row) for row in cursor.fetchall()]


def insert_goal(
    user_id: UserId,
    name: str,
    target_amount: Money,
    current_amount: Money,
    monthly_contribution: Money,
    target_date: date | None = None,
    db_path: Path | None = None,
) -> int:
    """Insert a savings goal.

    Returns:
        ID of the new goal.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _insert(
        """
        INSERT INTO goals (user_id, name, target_amount, current_amount, monthly_contribution, target_date)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (
            user_id,
            name,
            str(target_amount),
            str(current_amount),
            str(monthly_contribution),
            target_date.isoformat() if target_date else None,
        ),
        db_path,
    )


def get_goals(user_id: UserId, db_path: Path | None = None) -> list[Goal]:
    """Get all goals of a user in creation order.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM goals WHERE user_id = ? ORDER BY id", (user_id,))
        return [row_to_goal(row) for row in cursor.fetchall()]


def get_goal(user_id: UserId, goal_id: int, db_path: Path | None = None) -> Goal | None:
    """Get one of a user's goals by id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM goals WHERE user_id = ? AND id = ?", (user_id, goal_id))
        row = cursor.fetchone()
        return row_to_goal(row) if row else None


def update_goal_amount(goal_id: int, current_amount: Money, db_path: Path | None = None) -> bool:
    """Set the saved amount of a goal.

    Returns:
        True if the goal exists and was updated.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _update(
        "UPDATE goals SET current_amount = ? WHERE id = ?",
        (str(current_amount), goal_id),
        db_path,
    )

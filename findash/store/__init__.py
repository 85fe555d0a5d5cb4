"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from findash.store.queries import (
    get_account_by_name,
    get_accounts,
    get_categories,
    get_category_by_name,
    get_goal,
    get_goals,
    get_transactions,
    insert_account,
    insert_category,
    insert_goal,
    insert_transaction,
    update_account_balance,
    update_goal_amount,
)
from findash.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "get_account_by_name",
    "get_accounts",
    "get_categories",
    "get_category_by_name",
    "get_goal",
    "get_goals",
    "get_transactions",
    "insert_account",
    "insert_category",
    "insert_goal",
    "insert_transaction",
    "update_account_balance",
    "update_goal_amount",
]

"""Domain models and types for findash.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from findash.domain.models import (
    Account,
    BalancePoint,
    Category,
    CategoryAggregate,
    CategoryName,
    Frequency,
    Goal,
    Money,
    Month,
    SimulationPoint,
    Transaction,
    TransactionType,
    UserId,
)

__all__ = [
    "Account",
    "BalancePoint",
    "Category",
    "CategoryAggregate",
    "CategoryName",
    "Frequency",
    "Goal",
    "Money",
    "Month",
    "SimulationPoint",
    "Transaction",
    "TransactionType",
    "UserId",
]

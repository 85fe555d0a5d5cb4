"""Domain types and records for findash.

These types provide semantic clarity and help with type checking:
- Money: Decimal amount in major units (never a binary float)
- Month: Month in YYYY-MM format
- CategoryName: Display name of a category
- UserId: Identity that owns every stored record

Records mirror the rows handed over by the store. Derived entities
(CategoryAggregate, BalancePoint, SimulationPoint) are produced by the
domain functions and never persisted.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import NewType

# Money amounts are Decimals so sums and compounding never drift
Money = NewType("Money", Decimal)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

CategoryName = NewType("CategoryName", str)

UserId = NewType("UserId", str)

ZERO = Money(Decimal("0"))


class TransactionType(str, Enum):
    """Direction of a transaction. Categories are scoped by the same type."""

    INCOME = "income"
    EXPENSE = "expense"


class Frequency(str, Enum):
    """Recurrence frequency of a recurring transaction."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class Account:
    """Immutable account record."""

    id: int
    user_id: UserId
    name: str
    balance: Money


@dataclass(frozen=True)
class Category:
    """Immutable category record."""

    id: int
    user_id: UserId
    name: CategoryName
    type: TransactionType
    color: str
    icon: str | None = None


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction record.

    The amount is always non-negative; its sign comes from the type.
    """

    id: int
    user_id: UserId
    type: TransactionType
    amount: Money
    date: date
    category: Category | None = None
    account_name: str | None = None
    description: str | None = None
    recurring: bool = False
    frequency: Frequency | None = None

    @property
    def signed_amount(self) -> Money:
        """Amount with income positive and expenses negative."""
        if self.type is TransactionType.INCOME:
            return self.amount
        return Money(-self.amount)


@dataclass(frozen=True)
class Goal:
    """Immutable savings goal record."""

    id: int
    user_id: UserId
    name: str
    target_amount: Money | None
    current_amount: Money
    monthly_contribution: Money
    target_date: date | None = None


@dataclass(frozen=True)
class CategoryAggregate:
    """Summed expenses for one category over a period."""

    name: CategoryName
    color: str
    amount: Money


@dataclass(frozen=True)
class BalancePoint:
    """Running balance as of a month-end cutoff."""

    month: str
    balance: Money


@dataclass(frozen=True)
class SimulationPoint:
    """Investment value under both scenarios at one sampled month."""

    label: str
    month: int
    conservative: Money
    optimized: Money

"""Tests for findash.domain.ledger pure functions."""

from datetime import date
from decimal import Decimal

from findash.dates import month_window
from findash.domain.ledger import (
    in_period,
    monthly_expenses,
    net_total,
    summarize_ledger,
    total_balance,
    total_expenses,
    total_income,
)
from findash.domain.models import Account, Money, Transaction, TransactionType, UserId


def _account(balance: str, account_id: int = 1) -> Account:
    return Account(id=account_id, user_id=UserId("u1"), name=f"Account {account_id}", balance=Money(Decimal(balance)))


def _txn(txn_type: TransactionType, amount: str, day: date, txn_id: int = 1) -> Transaction:
    return Transaction(
        id=txn_id,
        user_id=UserId("u1"),
        type=txn_type,
        amount=Money(Decimal(amount)),
        date=day,
    )


class TestTotalBalance:
    """Tests for total_balance."""

    def test_empty(self) -> None:
        """Should return zero for no accounts."""
        assert total_balance([]) == 0

    def test_exact_decimal_sum(self) -> None:
        """Should sum without binary float drift."""
        accounts = [_account("0.1", 1), _account("0.2", 2), _account("0.3", 3)]
        assert total_balance(accounts) == Decimal("0.6")

    def test_negative_balances(self) -> None:
        """Should include overdrawn accounts."""
        assert total_balance([_account("1500.00", 1), _account("-250.75", 2)]) == Decimal("1249.25")


class TestMonthlyExpenses:
    """Tests for monthly_expenses and in_period."""

    def test_half_open_window(self) -> None:
        """Should include the first day and exclude the first day of next month."""
        start, end = month_window(2025, 3)
        txns = [
            _txn(TransactionType.EXPENSE, "10", date(2025, 3, 1), 1),
            _txn(TransactionType.EXPENSE, "20", date(2025, 3, 31), 2),
            _txn(TransactionType.EXPENSE, "40", date(2025, 4, 1), 3),
            _txn(TransactionType.EXPENSE, "80", date(2025, 2, 28), 4),
        ]

        assert monthly_expenses(txns, start, end) == Decimal("30")

    def test_ignores_income(self) -> None:
        """Should only count expenses."""
        start, end = month_window(2025, 3)
        txns = [
            _txn(TransactionType.EXPENSE, "12.50", date(2025, 3, 5), 1),
            _txn(TransactionType.INCOME, "1000", date(2025, 3, 5), 2),
        ]

        assert monthly_expenses(txns, start, end) == Decimal("12.50")

    def test_december_window(self) -> None:
        """Should roll the window into January of the next year."""
        start, end = month_window(2025, 12)
        txns = [
            _txn(TransactionType.EXPENSE, "5", date(2025, 12, 31), 1),
            _txn(TransactionType.EXPENSE, "7", date(2026, 1, 1), 2),
        ]

        assert monthly_expenses(txns, start, end) == Decimal("5")

    def test_empty(self) -> None:
        """Should return zero for no transactions."""
        start, end = month_window(2025, 3)
        assert monthly_expenses([], start, end) == 0

    def test_in_period(self) -> None:
        """Should treat the end date as exclusive."""
        txn = _txn(TransactionType.EXPENSE, "1", date(2025, 4, 1))
        assert not in_period(txn, date(2025, 3, 1), date(2025, 4, 1))
        assert in_period(txn, date(2025, 4, 1), date(2025, 5, 1))

    def test_many_small_amounts(self) -> None:
        """Should keep every cent across many transactions."""
        start, end = month_window(2025, 3)
        txns = [_txn(TransactionType.EXPENSE, "0.01", date(2025, 3, 15), i) for i in range(1000)]

        assert monthly_expenses(txns, start, end) == Decimal("10.00")


class TestTotals:
    """Tests for total_income, total_expenses and net_total."""

    def test_totals(self) -> None:
        """Should split income and expenses and net them."""
        txns = [
            _txn(TransactionType.INCOME, "3000", date(2025, 3, 1), 1),
            _txn(TransactionType.EXPENSE, "1200.50", date(2025, 3, 2), 2),
            _txn(TransactionType.EXPENSE, "99.50", date(2025, 3, 3), 3),
        ]

        assert total_income(txns) == Decimal("3000")
        assert total_expenses(txns) == Decimal("1300.00")
        assert net_total(txns) == Decimal("1700.00")

    def test_empty(self) -> None:
        """Should return zero for empty input."""
        assert total_income([]) == 0
        assert total_expenses([]) == 0
        assert net_total([]) == 0


class TestSummarizeLedger:
    """Tests for summarize_ledger."""

    def test_summary(self) -> None:
        """Should combine balance and period totals."""
        start, end = month_window(2025, 3)
        txns = [
            _txn(TransactionType.INCOME, "500", date(2025, 3, 1), 1),
            _txn(TransactionType.EXPENSE, "200", date(2025, 3, 2), 2),
            _txn(TransactionType.EXPENSE, "999", date(2025, 2, 2), 3),
        ]

        summary = summarize_ledger([_account("100")], txns, start, end)

        assert summary.total_balance == Decimal("100")
        assert summary.monthly_expenses == Decimal("200")
        assert summary.monthly_income == Decimal("500")
        assert summary.monthly_net == Decimal("300")

    def test_empty(self) -> None:
        """Should return zeros for empty input."""
        start, end = month_window(2025, 3)
        summary = summarize_ledger([], [], start, end)

        assert summary.total_balance == 0
        assert summary.monthly_expenses == 0
        assert summary.monthly_net == 0

"""Tests for findash.domain.history pure functions."""

from datetime import date
from decimal import Decimal

from findash.domain.history import (
    HISTORY_MONTHS,
    MonthlyTotals,
    balance_as_of,
    monthly_income_expense,
    reconstruct_balance_history,
)
from findash.domain.models import Money, Transaction, TransactionType, UserId

TODAY = date(2025, 3, 15)


def _txn(txn_type: TransactionType, amount: str, day: date, txn_id: int = 1) -> Transaction:
    return Transaction(
        id=txn_id,
        user_id=UserId("u1"),
        type=txn_type,
        amount=Money(Decimal(amount)),
        date=day,
    )


class TestBalanceAsOf:
    """Tests for balance_as_of."""

    def test_cutoff_is_inclusive(self) -> None:
        """Should include transactions dated on the cutoff."""
        txns = [
            _txn(TransactionType.INCOME, "100", date(2025, 1, 31), 1),
            _txn(TransactionType.EXPENSE, "30", date(2025, 2, 1), 2),
        ]

        assert balance_as_of(txns, date(2025, 1, 31)) == Decimal("100")
        assert balance_as_of(txns, date(2025, 2, 1)) == Decimal("70")

    def test_empty(self) -> None:
        """Should return zero without transactions."""
        assert balance_as_of([], TODAY) == 0


class TestReconstructBalanceHistory:
    """Tests for reconstruct_balance_history."""

    def test_no_transactions_gives_flat_zero_history(self) -> None:
        """Should return one zero point per month."""
        points = reconstruct_balance_history([], TODAY)

        assert len(points) == HISTORY_MONTHS == 4
        assert all(point.balance == 0 for point in points)

    def test_labels_oldest_first_across_year(self) -> None:
        """Should label trailing months in chronological order."""
        points = reconstruct_balance_history([], TODAY)
        assert [p.month for p in points] == ["Dec", "Jan", "Feb", "Mar"]

    def test_portuguese_labels(self) -> None:
        """Should use localized abbreviations."""
        points = reconstruct_balance_history([], TODAY, locale="pt-BR")
        assert [p.month for p in points] == ["dez.", "jan.", "fev.", "mar."]

    def test_cumulative_replay(self) -> None:
        """Should replay every transaction up to each month end."""
        txns = [
            _txn(TransactionType.INCOME, "1000", date(2025, 1, 10), 1),
            _txn(TransactionType.EXPENSE, "200", date(2025, 2, 28), 2),
            _txn(TransactionType.EXPENSE, "50", date(2025, 3, 1), 3),
            _txn(TransactionType.INCOME, "5000", date(2025, 4, 1), 4),
        ]

        points = reconstruct_balance_history(txns, TODAY)

        assert [p.balance for p in points] == [Decimal("0"), Decimal("1000"), Decimal("800"), Decimal("750")]

    def test_includes_history_before_window(self) -> None:
        """Should start from transactions older than the window."""
        txns = [_txn(TransactionType.INCOME, "300", date(2020, 6, 1))]

        points = reconstruct_balance_history(txns, TODAY)

        assert [p.balance for p in points] == [Decimal("300")] * 4

    def test_leap_day_is_in_february(self) -> None:
        """Should include 29 February in the February cutoff."""
        txns = [_txn(TransactionType.EXPENSE, "10", date(2024, 2, 29))]

        points = reconstruct_balance_history(txns, date(2024, 3, 1), months=2)

        assert [p.balance for p in points] == [Decimal("-10"), Decimal("-10")]
        assert [p.month for p in points] == ["Feb", "Mar"]

    def test_custom_window(self) -> None:
        """Should produce as many points as requested."""
        assert len(reconstruct_balance_history([], TODAY, months=12)) == 12

    def test_accepts_generators(self) -> None:
        """Should replay a one-shot iterable for every point."""
        txns = [_txn(TransactionType.INCOME, "10", date(2025, 1, 5))]

        points = reconstruct_balance_history((t for t in txns), TODAY)

        assert points[-1].balance == Decimal("10")
        assert points[-2].balance == Decimal("10")


class TestMonthlyIncomeExpense:
    """Tests for monthly_income_expense."""

    def test_groups_by_month_in_order(self) -> None:
        """Should total income and expenses per month, oldest first."""
        txns = [
            _txn(TransactionType.EXPENSE, "40", date(2025, 1, 20), 1),
            _txn(TransactionType.INCOME, "900", date(2024, 12, 5), 2),
            _txn(TransactionType.EXPENSE, "60", date(2025, 1, 2), 3),
            _txn(TransactionType.INCOME, "100", date(2025, 1, 2), 4),
        ]

        result = monthly_income_expense(txns)

        assert result == [
            MonthlyTotals(month="Dec", income=Money(Decimal("900")), expenses=Money(Decimal("0"))),
            MonthlyTotals(month="Jan", income=Money(Decimal("100")), expenses=Money(Decimal("100"))),
        ]

    def test_empty(self) -> None:
        """Should return an empty series."""
        assert monthly_income_expense([]) == []

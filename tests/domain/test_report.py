"""Tests for findash.domain.report pure functions."""

from datetime import date
from decimal import Decimal

import pytest

from findash.domain.models import Category, CategoryName, Money, Transaction, TransactionType, UserId
from findash.domain.report import build_period_report, filter_transactions, format_money, paginate

GROCERIES = Category(
    id=1, user_id=UserId("u1"), name=CategoryName("Groceries"), type=TransactionType.EXPENSE, color="#10B981"
)
SALARY = Category(
    id=2, user_id=UserId("u1"), name=CategoryName("Salary"), type=TransactionType.INCOME, color="#22C55E"
)


def _txn(
    txn_type: TransactionType,
    amount: str,
    category: Category | None = None,
    description: str | None = None,
    account_name: str | None = None,
    txn_id: int = 1,
) -> Transaction:
    return Transaction(
        id=txn_id,
        user_id=UserId("u1"),
        type=txn_type,
        amount=Money(Decimal(amount)),
        date=date(2025, 3, txn_id),
        category=category,
        description=description,
        account_name=account_name,
    )


SAMPLE = [
    _txn(TransactionType.INCOME, "3000", SALARY, "March salary", "Checking", 1),
    _txn(TransactionType.EXPENSE, "150.25", GROCERIES, "Weekly shop", "Checking", 2),
    _txn(TransactionType.EXPENSE, "40", None, "Cinema", "Credit card", 3),
    _txn(TransactionType.EXPENSE, "60", GROCERIES, "Farmers market", None, 4),
]


class TestBuildPeriodReport:
    """Tests for build_period_report."""

    def test_totals(self) -> None:
        """Should compute income, expenses and balance."""
        report = build_period_report(SAMPLE)

        assert report.total_income == Decimal("3000")
        assert report.total_expenses == Decimal("250.25")
        assert report.balance == Decimal("2749.75")

    def test_categories_sorted_by_amount(self) -> None:
        """Should list expense categories largest first."""
        report = build_period_report(SAMPLE)

        assert [(c.name, c.amount) for c in report.categories] == [
            ("Groceries", Decimal("210.25")),
            ("Other", Decimal("40")),
        ]

    def test_monthly_series(self) -> None:
        """Should include the monthly totals."""
        report = build_period_report(SAMPLE)

        assert len(report.monthly) == 1
        assert report.monthly[0].income == Decimal("3000")
        assert report.monthly[0].expenses == Decimal("250.25")

    def test_empty(self) -> None:
        """Should return zeros and no categories."""
        report = build_period_report([])

        assert report.total_income == 0
        assert report.total_expenses == 0
        assert report.balance == 0
        assert report.categories == []
        assert report.monthly == []

    def test_portuguese_labels(self) -> None:
        """Should localise the uncategorised bucket and drop the placeholder."""
        report = build_period_report(SAMPLE, locale="pt-BR")

        assert [c.name for c in report.categories] == ["Groceries", "Outros"]
        assert build_period_report([], locale="pt-BR").categories == []


class TestFilterTransactions:
    """Tests for filter_transactions."""

    def test_no_filters(self) -> None:
        """Should return everything."""
        assert filter_transactions(SAMPLE) == SAMPLE

    def test_type_filter(self) -> None:
        """Should keep only the chosen type."""
        assert [t.id for t in filter_transactions(SAMPLE, type_filter="income")] == [1]
        assert [t.id for t in filter_transactions(SAMPLE, type_filter="expense")] == [2, 3, 4]

    def test_search_description_case_insensitive(self) -> None:
        """Should match description text ignoring case."""
        assert [t.id for t in filter_transactions(SAMPLE, search="CINEMA")] == [3]

    def test_search_category_and_account(self) -> None:
        """Should match category and account names."""
        assert [t.id for t in filter_transactions(SAMPLE, search="groceries")] == [2, 4]
        assert [t.id for t in filter_transactions(SAMPLE, search="credit")] == [3]

    def test_search_and_type_combined(self) -> None:
        """Should apply both filters."""
        assert [t.id for t in filter_transactions(SAMPLE, search="checking", type_filter="expense")] == [2]

    def test_unknown_type_raises(self) -> None:
        """Should reject unknown type filters."""
        with pytest.raises(ValueError):
            filter_transactions(SAMPLE, type_filter="transfers")


class TestPaginate:
    """Tests for paginate."""

    def test_first_page(self) -> None:
        """Should return the first slice and page count."""
        page = paginate(list(range(25)), page=1, per_page=10)

        assert page.items == list(range(10))
        assert page.total_pages == 3
        assert page.total_items == 25

    def test_last_partial_page(self) -> None:
        """Should return the remainder on the last page."""
        assert paginate(list(range(25)), page=3, per_page=10).items == [20, 21, 22, 23, 24]

    def test_out_of_range(self) -> None:
        """Should return no items for pages past the end or below one."""
        assert paginate(list(range(5)), page=4, per_page=10).items == []
        assert paginate(list(range(5)), page=0, per_page=10).items == []

    def test_empty(self) -> None:
        """Should report zero pages for no items."""
        assert paginate([], page=1, per_page=10).total_pages == 0


class TestFormatMoney:
    """Tests for format_money."""

    def test_brl(self) -> None:
        """Should use the real symbol with a space."""
        assert format_money(Decimal("1234.5"), "BRL") == "R$ 1,234.50"

    def test_gbp_with_sign(self) -> None:
        """Should prefix a sign when requested."""
        assert format_money(Decimal("12"), "GBP", include_sign=True) == "+£12.00"
        assert format_money(Decimal("-12"), "GBP", include_sign=True) == "-£12.00"

    def test_negative_without_sign_flag(self) -> None:
        """Should always show the minus sign."""
        assert format_money(Decimal("-0.5"), "USD") == "-$0.50"

    def test_unknown_currency(self) -> None:
        """Should fall back to the currency code."""
        assert format_money(Decimal("3"), "chf") == "CHF 3.00"

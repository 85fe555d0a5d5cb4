"""Tests for findash.domain.categories pure functions."""

from datetime import date
from decimal import Decimal

from findash.domain.categories import (
    FALLBACK_CATEGORY_COLOR,
    FALLBACK_CATEGORY_NAME,
    NO_DATA_LABEL,
    calculate_histogram_bar_length,
    category_share,
    fallback_category_name,
    group_expenses_by_category,
    group_expenses_by_category_id,
    is_placeholder,
    sort_aggregates,
)
from findash.domain.models import (
    Category,
    CategoryAggregate,
    CategoryName,
    Money,
    Transaction,
    TransactionType,
    UserId,
)

FOOD = Category(
    id=1, user_id=UserId("u1"), name=CategoryName("Food"), type=TransactionType.EXPENSE, color="#F59E0B"
)
RENT = Category(
    id=2, user_id=UserId("u1"), name=CategoryName("Rent"), type=TransactionType.EXPENSE, color="#3B82F6"
)


def _expense(amount: str, category: Category | None = None, txn_id: int = 1) -> Transaction:
    return Transaction(
        id=txn_id,
        user_id=UserId("u1"),
        type=TransactionType.EXPENSE,
        amount=Money(Decimal(amount)),
        date=date(2025, 3, 10),
        category=category,
    )


def _as_dict(aggregates: list[CategoryAggregate]) -> dict[str, Decimal]:
    return {a.name: a.amount for a in aggregates}


class TestGroupExpensesByCategory:
    """Tests for group_expenses_by_category."""

    def test_groups_and_sums(self) -> None:
        """Should sum amounts per category name."""
        txns = [_expense("200", FOOD, 1), _expense("50", FOOD, 2), _expense("75", RENT, 3)]

        result = group_expenses_by_category(txns)

        assert _as_dict(result) == {"Food": Decimal("250"), "Rent": Decimal("75")}

    def test_order_independent(self) -> None:
        """Should give the same set of aggregates for any input order."""
        txns = [_expense("200", FOOD, 1), _expense("50", FOOD, 2), _expense("75", RENT, 3)]

        forward = set(group_expenses_by_category(txns))
        backward = set(group_expenses_by_category(list(reversed(txns))))

        assert forward == backward

    def test_keeps_category_color(self) -> None:
        """Should carry the category colour onto the aggregate."""
        result = group_expenses_by_category([_expense("10", RENT)])
        assert result == [CategoryAggregate(name=CategoryName("Rent"), color="#3B82F6", amount=Money(Decimal("10")))]

    def test_uncategorised_go_to_fallback(self) -> None:
        """Should bucket expenses without category under the fallback label."""
        result = group_expenses_by_category([_expense("10", None, 1), _expense("5.50", None, 2)])

        assert len(result) == 1
        assert result[0].name == FALLBACK_CATEGORY_NAME
        assert result[0].color == FALLBACK_CATEGORY_COLOR
        assert result[0].amount == Decimal("15.50")

    def test_empty_input_gives_placeholder(self) -> None:
        """Should return a single no-data placeholder for empty input."""
        result = group_expenses_by_category([])

        assert len(result) == 1
        assert result[0].name == NO_DATA_LABEL
        assert result[0].color == FALLBACK_CATEGORY_COLOR
        assert result[0].amount == 0
        assert is_placeholder(result)

    def test_portuguese_labels(self) -> None:
        """Should use the locale's fallback and placeholder labels."""
        result = group_expenses_by_category([_expense("10", None, 1)], "pt-BR")
        assert [a.name for a in result] == ["Outros"]

        placeholder = group_expenses_by_category([], "pt-BR")
        assert placeholder[0].name == "Sem dados"
        assert is_placeholder(placeholder)

    def test_unknown_locale_uses_english_labels(self) -> None:
        """Should fall back to the English labels."""
        assert fallback_category_name("xx") == FALLBACK_CATEGORY_NAME
        assert group_expenses_by_category([], "xx")[0].name == NO_DATA_LABEL

    def test_income_is_ignored(self) -> None:
        """Should skip income transactions."""
        income = Transaction(
            id=9,
            user_id=UserId("u1"),
            type=TransactionType.INCOME,
            amount=Money(Decimal("3000")),
            date=date(2025, 3, 1),
        )

        assert is_placeholder(group_expenses_by_category([income]))
        assert _as_dict(group_expenses_by_category([income, _expense("20", FOOD)])) == {"Food": Decimal("20")}

    def test_same_name_categories_merge(self) -> None:
        """Should merge distinct categories sharing a display name."""
        other_food = Category(
            id=7, user_id=UserId("u1"), name=CategoryName("Food"), type=TransactionType.EXPENSE, color="#000000"
        )

        result = group_expenses_by_category([_expense("10", FOOD, 1), _expense("15", other_food, 2)])

        assert len(result) == 1
        assert result[0].amount == Decimal("25")
        assert result[0].color == "#F59E0B"

    def test_sum_matches_total_expenses(self) -> None:
        """Should count every expense exactly once."""
        entries = [("0.10", FOOD), ("0.20", RENT), ("0.30", None), ("12.34", FOOD), ("0.01", None)]
        txns = [_expense(amount, category, i) for i, (amount, category) in enumerate(entries)]

        result = group_expenses_by_category(txns)

        assert sum(a.amount for a in result) == Decimal("12.95")

    def test_merging_adds_exact_amount(self) -> None:
        """Should increase a category by exactly the added amounts."""
        before = _as_dict(group_expenses_by_category([_expense("100", FOOD, 1)]))
        after = _as_dict(
            group_expenses_by_category([_expense("100", FOOD, 1), _expense("0.07", FOOD, 2), _expense("3", FOOD, 3)])
        )

        assert after["Food"] - before["Food"] == Decimal("3.07")


class TestGroupExpensesByCategoryId:
    """Tests for group_expenses_by_category_id."""

    def test_same_name_categories_stay_separate(self) -> None:
        """Should keep categories with equal names apart."""
        other_food = Category(
            id=7, user_id=UserId("u1"), name=CategoryName("Food"), type=TransactionType.EXPENSE, color="#000000"
        )

        result = group_expenses_by_category_id([_expense("10", FOOD, 1), _expense("15", other_food, 2)])

        assert sorted(a.amount for a in result) == [Decimal("10"), Decimal("15")]

    def test_empty_input_gives_placeholder(self) -> None:
        """Should return the placeholder for empty input."""
        assert is_placeholder(group_expenses_by_category_id([]))


class TestSortAggregates:
    """Tests for sort_aggregates."""

    def test_sort_by_value_descending(self) -> None:
        """Should put the largest category first."""
        result = sort_aggregates(group_expenses_by_category([_expense("5", FOOD, 1), _expense("50", RENT, 2)]))
        assert [a.name for a in result] == ["Rent", "Food"]

    def test_sort_alpha(self) -> None:
        """Should sort by name."""
        result = sort_aggregates(
            group_expenses_by_category([_expense("50", RENT, 1), _expense("5", FOOD, 2)]),
            sort_by="alpha",
        )
        assert [a.name for a in result] == ["Food", "Rent"]


class TestCategoryShare:
    """Tests for category_share and calculate_histogram_bar_length."""

    def test_share(self) -> None:
        """Should compute the percentage of the total."""
        assert category_share(Money(Decimal("25")), Money(Decimal("100"))) == 25.0

    def test_share_zero_total(self) -> None:
        """Should return zero when the total is zero."""
        assert category_share(Money(Decimal("25")), Money(Decimal("0"))) == 0.0

    def test_bar_length(self) -> None:
        """Should scale against the maximum."""
        assert calculate_histogram_bar_length(Money(Decimal("50")), Money(Decimal("100")), 30) == 15

    def test_bar_length_zero_max(self) -> None:
        """Should return zero when the maximum is zero."""
        assert calculate_histogram_bar_length(Money(Decimal("0")), Money(Decimal("0")), 30) == 0

"""Pure functions for grouping expenses by category.

Grouping is keyed by category display name, so two categories with the
same name merge into one aggregate. An id-keyed variant is provided for
callers that need distinct categories kept apart.

All monetary amounts are Decimals (Money type).
"""

from collections.abc import Callable, Hashable, Iterable

from findash.domain.models import ZERO, CategoryAggregate, CategoryName, Money, Transaction, TransactionType

FALLBACK_CATEGORY_NAME = CategoryName("Other")
FALLBACK_CATEGORY_COLOR = "#6B7280"
NO_DATA_LABEL = CategoryName("No data")

# (fallback category, no-data placeholder) per locale
CATEGORY_LABELS: dict[str, tuple[CategoryName, CategoryName]] = {
    "en": (FALLBACK_CATEGORY_NAME, NO_DATA_LABEL),
    "pt-BR": (CategoryName("Outros"), CategoryName("Sem dados")),
}


def fallback_category_name(locale: str = "en") -> CategoryName:
    """Label for uncategorised expenses; unknown locales fall back to English."""
    return CATEGORY_LABELS.get(locale, CATEGORY_LABELS["en"])[0]


def no_data_placeholder(locale: str = "en") -> list[CategoryAggregate]:
    """Single aggregate shown when there are no expenses to group."""
    label = CATEGORY_LABELS.get(locale, CATEGORY_LABELS["en"])[1]
    return [CategoryAggregate(name=label, color=FALLBACK_CATEGORY_COLOR, amount=ZERO)]


def is_placeholder(aggregates: list[CategoryAggregate]) -> bool:
    """Check whether grouper output is the no-data placeholder in any locale."""
    placeholder_labels = {labels[1] for labels in CATEGORY_LABELS.values()}
    return len(aggregates) == 1 and aggregates[0].name in placeholder_labels and aggregates[0].amount == 0


def _label(transaction: Transaction, locale: str = "en") -> tuple[CategoryName, str]:
    fallback = fallback_category_name(locale)
    if transaction.category is None:
        return fallback, FALLBACK_CATEGORY_COLOR
    name = transaction.category.name or fallback
    color = transaction.category.color or FALLBACK_CATEGORY_COLOR
    return CategoryName(name), color


def _group(
    transactions: Iterable[Transaction],
    key: Callable[[Transaction], Hashable],
    locale: str,
) -> list[CategoryAggregate]:
    groups: dict[Hashable, CategoryAggregate] = {}

    for txn in transactions:
        if txn.type is not TransactionType.EXPENSE:
            continue

        group_key = key(txn)
        existing = groups.get(group_key)
        if existing is None:
            name, color = _label(txn, locale)
            groups[group_key] = CategoryAggregate(name=name, color=color, amount=txn.amount)
        else:
            groups[group_key] = CategoryAggregate(
                name=existing.name,
                color=existing.color,
                amount=Money(existing.amount + txn.amount),
            )

    if not groups:
        return no_data_placeholder(locale)
    return list(groups.values())


def group_expenses_by_category(transactions: Iterable[Transaction], locale: str = "en") -> list[CategoryAggregate]:
    """Bucket expense amounts by category name.

    Income transactions are ignored. Uncategorised expenses go to the
    fallback bucket. The first colour seen for a name is kept.

    Args:
        transactions: Transactions for the period being charted.
        locale: Locale of the fallback and placeholder labels.

    Returns:
        One aggregate per distinct category name, in first-seen order, or
        the no-data placeholder when there are no expenses.
    """
    return _group(transactions, lambda txn: _label(txn, locale)[0], locale)


def group_expenses_by_category_id(transactions: Iterable[Transaction], locale: str = "en") -> list[CategoryAggregate]:
    """Bucket expense amounts by category id.

    Same as group_expenses_by_category, but categories sharing a name stay
    separate. Uncategorised expenses share a single fallback bucket.
    """
    return _group(transactions, lambda txn: txn.category.id if txn.category is not None else None, locale)


def sort_aggregates(aggregates: list[CategoryAggregate], sort_by: str = "value") -> list[CategoryAggregate]:
    """Sort aggregates by value or alphabetically.

    Args:
        aggregates: Grouper output.
        sort_by: "value" (largest first) or "alpha".

    Returns:
        New sorted list.
    """
    if sort_by == "alpha":
        return sorted(aggregates, key=lambda a: a.name.lower())
    return sorted(aggregates, key=lambda a: a.amount, reverse=True)


def category_share(amount: Money, total: Money) -> float:
    """Percentage of the total taken by one category (0-100)."""
    if total <= 0:
        return 0.0
    return float(amount / total * 100)


def calculate_histogram_bar_length(amount: Money, max_amount: Money, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int(abs(amount) / max_amount * bar_width)

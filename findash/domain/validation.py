"""Pure validation for records entering the store.

The aggregation functions assume well-formed records, so amounts, types and
category scoping are checked here, at the point of entry. Validators return
(is_valid, error_message) tuples.
"""

import re
from decimal import Decimal, InvalidOperation

from findash.domain.models import Category, Frequency, Money, TransactionType

_CURRENCY_PREFIX = re.compile(r"^(R\$|US\$|[£$€])\s*")
_GROUPED = re.compile(r"^\d{1,3}(?:[.,]\d{3})+$")


def _normalize_separators(number: str) -> str:
    """Rewrite an amount with "." as the only decimal separator.

    With both separators present the last one is the decimal point. A lone
    comma followed by one or two digits is a decimal comma ("10,50").
    Separators splitting the number into groups of three are thousands
    separators ("1,234", "1.234.567").

    Raises:
        ValueError: If the separators do not fit any of those shapes.
    """
    if "," in number and "." in number:
        decimal_sep = "," if number.rfind(",") > number.rfind(".") else "."
        group_sep = "." if decimal_sep == "," else ","
        integer, _, fraction = number.rpartition(decimal_sep)
        if decimal_sep in integer or (group_sep in integer and not _GROUPED.match(integer)):
            raise ValueError(f"Ambiguous amount '{number}'")
        return integer.replace(group_sep, "") + "." + fraction

    for sep in (",", "."):
        if sep not in number:
            continue
        if _GROUPED.match(number) and (sep == "," or number.count(".") > 1):
            return number.replace(sep, "")
        if number.count(sep) == 1:
            integer, _, fraction = number.partition(sep)
            if sep == "." or len(fraction) in (1, 2):
                return f"{integer}.{fraction}"
        raise ValueError(f"Ambiguous amount '{number}'")

    return number


def parse_money(text: str) -> Money:
    """Parse a user-entered amount into a Decimal.

    Accepts a leading currency symbol and either decimal convention
    (e.g. "1,234.50", "R$ 1.234,56", "10,50", "£4.99").

    Raises:
        ValueError: If the text is not a number or its separators are
            ambiguous.
    """
    cleaned = text.strip()
    negative = cleaned.startswith("-")
    if negative:
        cleaned = cleaned[1:].strip()
    cleaned = _normalize_separators(_CURRENCY_PREFIX.sub("", cleaned))

    try:
        value = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{text}'") from e

    if not value.is_finite():
        raise ValueError(f"Could not parse amount '{text}'")

    return Money(-value if negative else value)


def validate_amount(amount: Money) -> tuple[bool, str | None]:
    """Transaction amounts are stored positive; the type carries the sign."""
    if amount <= 0:
        return False, "Amount must be positive"
    return True, None


def validate_transaction_category(
    txn_type: TransactionType,
    category: Category | None,
) -> tuple[bool, str | None]:
    """Check that a category, if given, matches the transaction type.

    Args:
        txn_type: Type of the transaction being entered.
        category: Category chosen for it, or None.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if category is None:
        return True, None

    if category.type is not txn_type:
        return False, f"Category '{category.name}' is an {category.type.value} category, not {txn_type.value}"

    return True, None


def validate_frequency(recurring: bool, frequency: str | None) -> tuple[bool, str | None]:
    """Recurring transactions need a known frequency."""
    if not recurring:
        return True, None

    if not frequency:
        return False, "Recurring transactions need a frequency"

    valid = [f.value for f in Frequency]
    if frequency not in valid:
        return False, f"Unknown frequency '{frequency}'. Use one of: {', '.join(valid)}"

    return True, None


def validate_goal(target: Money, current: Money, monthly: Money) -> tuple[bool, str | None]:
    """Validate the amounts of a new goal.

    Args:
        target: Target amount.
        current: Amount already saved.
        monthly: Planned monthly contribution.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if target <= 0:
        return False, "Target amount must be positive"

    if current < 0:
        return False, "Current amount cannot be negative"

    if monthly < 0:
        return False, "Monthly contribution cannot be negative"

    return True, None

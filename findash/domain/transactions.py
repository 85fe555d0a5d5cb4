"""Pure functions for turning CSV rows into transaction entries.

This module contains the functional core for imports:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Amounts are parsed into Decimals and stored positive; the sign in the file
decides the type when no type is forced.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import TypedDict

from findash.domain.models import Money, TransactionType
from findash.domain.validation import parse_money


class CsvMapping(TypedDict):
    """CSV column mapping configuration."""

    date_column: str
    description_column: str
    amount_column: str
    category_column: str


@dataclass(frozen=True)
class ParsedTransaction:
    """Transaction entry parsed from a CSV row, ready for insertion."""

    date: date
    description: str
    amount: Money
    type: TransactionType
    category: str | None = None


def analyze_csv_columns(headers: list[str]) -> dict[str, str]:
    """Analyze CSV headers and suggest column mappings.

    Args:
        headers: List of CSV column names.

    Returns:
        Dictionary with suggested mappings for date, description, amount and
        category (empty string if not detected).
    """
    mappings: dict[str, str] = {
        "date": "",
        "description": "",
        "amount": "",
        "category": "",
    }

    headers_lower = [h.lower() for h in headers]

    for i, header in enumerate(headers_lower):
        if not mappings["date"] and ("date" in header or header == "data"):
            mappings["date"] = headers[i]

        if not mappings["description"]:
            if "merchant" in header and "name" in header:
                mappings["description"] = headers[i]
            elif "description" in header or "descri" in header:
                mappings["description"] = headers[i]

        if not mappings["amount"] and ("amount" in header or "valor" in header) and "currency" not in header:
            mappings["amount"] = headers[i]

        if not mappings["category"] and ("category" in header or "categoria" in header):
            mappings["category"] = headers[i]

    return mappings


def resolve_type(amount: Money, forced: TransactionType | None) -> TransactionType:
    """Pick the transaction type from a forced value or the amount's sign."""
    if forced is not None:
        return forced
    return TransactionType.EXPENSE if amount < 0 else TransactionType.INCOME


def parse_csv_transaction(
    row: dict[str, str],
    mapping: CsvMapping,
    normalize_date: Callable[[str], date],
    forced_type: TransactionType | None = None,
) -> ParsedTransaction | None:
    """Parse a CSV row into a transaction using the provided mapping.

    Args:
        row: CSV row as dictionary.
        mapping: Column mapping configuration.
        normalize_date: Converts the raw date text into a date.
        forced_type: Type for every row; when None the sign decides.

    Returns:
        ParsedTransaction if valid, None if the row should be skipped
        (missing date or amount, unparseable or zero amount).

    Raises:
        ValueError: If the date cannot be parsed.
    """
    raw_date = (row.get(mapping["date_column"]) or "").strip()
    if not raw_date:
        return None

    raw_amount = (row.get(mapping["amount_column"]) or "").strip()
    if not raw_amount:
        return None

    try:
        amount = parse_money(raw_amount)
    except ValueError:
        return None

    if amount == 0:
        return None

    description = (row.get(mapping["description_column"]) or "").strip() or "Unknown"

    category = None
    if mapping["category_column"]:
        category = (row.get(mapping["category_column"]) or "").strip() or None

    return ParsedTransaction(
        date=normalize_date(raw_date),
        description=description,
        amount=Money(abs(amount)),
        type=resolve_type(amount, forced_type),
        category=category,
    )

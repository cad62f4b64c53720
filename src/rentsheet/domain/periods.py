"""Accounting period helpers shared by the sheet builders.

Months are zero-based (0 = January) throughout the domain, matching the
stored ``rentMonth`` values.
"""

from rentsheet.domain.entities import Transaction
from rentsheet.domain.errors import ValidationError, invalid_period

MONTH_NAMES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


def validate_period(month: int, year: int) -> None:
    """Raise ValidationError unless month is 0-11 and year is positive."""
    if not 0 <= month <= 11 or year < 1:
        raise ValidationError(invalid_period(month, year))


def month_name(month: int) -> str:
    """Return the display name of a zero-based month."""
    return MONTH_NAMES[month]


def in_calendar_month(txn: Transaction, month: int, year: int) -> bool:
    """Return True if the transaction's real date falls in the month."""
    return txn.date.month - 1 == month and txn.date.year == year


def has_period(txn: Transaction, month: int, year: int) -> bool:
    """Return True if the transaction is attributed to the given period."""
    return txn.rent_month == month and txn.rent_year == year


def income_matches(txn: Transaction, month: int, year: int) -> bool:
    """Income belongs to a period only through its assigned rent period."""
    return txn.is_income and has_period(txn, month, year)


def expense_matches_period(txn: Transaction, month: int, year: int) -> bool:
    """Monthly-sheet rule for expenses.

    An assigned period always wins, even when it disagrees with the date.
    Records without one (created before periods existed) fall back to the
    calendar month of their date.
    """
    if not txn.is_expense:
        return False
    if txn.has_period:
        return has_period(txn, month, year)
    return in_calendar_month(txn, month, year)


def expense_matches_date(txn: Transaction, month: int, year: int) -> bool:
    """Yearly-rollup rule for expenses: the real date only."""
    return txn.is_expense and in_calendar_month(txn, month, year)


def is_relevant(txn: Transaction, month: int, year: int) -> bool:
    """Return True if the transaction happened in, or is attributed to, the month."""
    return in_calendar_month(txn, month, year) or has_period(txn, month, year)

"""Amount parsing and formatting utilities."""

import math
import re

_THOUSANDS_GROUPS = re.compile(r"\d{1,3}([.,]\d{3})+")


def parse_amount(amount_str: str) -> float:
    """Parse an amount string into a float.

    Handles various formats:
    - "150000"
    - "$150.000" / "$ 150,000"
    - "ARS 150.000"
    - "1.234,56" / "1,234.56"
    - "99.5"

    A single separator followed by exactly three-digit groups is read as a
    thousands separator, so "150.000" is one hundred fifty thousand.

    Args:
        amount_str: Amount string

    Returns:
        Amount as float

    Raises:
        ValueError: If amount string cannot be parsed or is negative
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency symbols
    cleaned = re.sub(r"(?i)ars|\$", "", amount_str)
    cleaned = cleaned.replace(" ", "").strip()

    if "." in cleaned and "," in cleaned:
        # Whichever separator comes last is the decimal mark
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif _THOUSANDS_GROUPS.fullmatch(cleaned.lstrip("-")):
        cleaned = cleaned.replace(".", "").replace(",", "")
    else:
        cleaned = cleaned.replace(",", ".")

    try:
        amount = float(cleaned)
    except ValueError as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")

    if not math.isfinite(amount):
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0:
        raise ValueError(f"Amount must not be negative, got '{amount_str}'")
    return amount


def format_currency(amount: float) -> str:
    """Format an amount like "$ 150.000" (dot thousands, no decimals)."""
    sign = "-" if amount < 0 else ""
    digits = f"{round(abs(amount)):,}".replace(",", ".")
    return f"{sign}$ {digits}"

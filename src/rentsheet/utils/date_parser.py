"""Date and period parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from rentsheet.domain.periods import MONTH_NAMES

ENGLISH_MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15/01/2024", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow"

    Day-first is assumed for slash dates, as in the exported reports.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    match = re.fullmatch(r"(\d{4})-(\d{1,2})-(\d{1,2})", date_str)
    if match:
        # Year-first dates are never read day-first
        try:
            return date(*(int(part) for part in match.groups()))
        except ValueError as e:
            raise ValueError(f"Could not parse date '{date_str}': {e}")

    try:
        dt = date_parser.parse(date_str, dayfirst=True)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def _month_index(name: str) -> int | None:
    name = name.lower()
    for names in (ENGLISH_MONTH_NAMES, MONTH_NAMES):
        for index, full_name in enumerate(names):
            if name == full_name or (len(name) >= 3 and full_name.startswith(name)):
                return index
    return None


def parse_period(period_str: str) -> tuple[int, int]:
    """Parse an accounting period into a zero-based (month, year) pair.

    Supports:
    - "2024-04" and "04/2024"
    - Month names in English or Spanish: "april 2024", "abril 2024", "apr 2024"
    - Relative periods: "this month", "last month", "next month"

    Args:
        period_str: Period string

    Returns:
        Tuple of (month, year) with month 0-11

    Raises:
        ValueError: If the period cannot be parsed
    """
    period_str = period_str.strip().lower()
    if not period_str:
        raise ValueError("Empty period string")

    this_month = date.today().replace(day=1)
    relative_periods = {
        "this month": this_month,
        "last month": this_month - relativedelta(months=1),
        "next month": this_month + relativedelta(months=1),
    }
    if period_str in relative_periods:
        first = relative_periods[period_str]
        return first.month - 1, first.year

    month: int | None = None
    year: int | None = None

    match = re.fullmatch(r"(\d{4})-(\d{1,2})", period_str)
    if match:
        year, month = int(match.group(1)), int(match.group(2)) - 1
    else:
        match = re.fullmatch(r"(\d{1,2})/(\d{4})", period_str)
        if match:
            month, year = int(match.group(1)) - 1, int(match.group(2))
        else:
            match = re.fullmatch(r"([a-záéíóú.]+)\s+(\d{4})", period_str)
            if match:
                month = _month_index(match.group(1).rstrip("."))
                year = int(match.group(2))

    if month is None or year is None or not 0 <= month <= 11:
        raise ValueError(f"Could not parse period '{period_str}'")
    return month, year

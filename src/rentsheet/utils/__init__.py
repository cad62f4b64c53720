"""Utility functions for rentsheet."""

from rentsheet.utils.date_parser import parse_date, parse_period
from rentsheet.utils.amount_parser import format_currency, parse_amount

__all__ = ["parse_date", "parse_period", "parse_amount", "format_currency"]

"""Tests for date and period parsing."""

import pytest
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta
from rentsheet.utils.date_parser import parse_date, parse_period


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("2024-1-5") == date(2024, 1, 5)


def test_parse_day_first_date():
    """Slash dates are read day first."""
    assert parse_date("05/04/2024") == date(2024, 4, 5)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


def test_parse_free_form_date():
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()
    assert parse_date("  Today ") == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    assert parse_date("yesterday") == date.today() - timedelta(days=1)


def test_parse_tomorrow():
    """Test parsing 'tomorrow'."""
    assert parse_date("tomorrow") == date.today() + timedelta(days=1)


@pytest.mark.parametrize("value", ["not a date", "2024-02-30", ""])
def test_parse_invalid_date(value):
    with pytest.raises(ValueError):
        parse_date(value)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-04", (3, 2024)),
        ("2024-4", (3, 2024)),
        ("04/2024", (3, 2024)),
        ("12/2023", (11, 2023)),
        ("april 2024", (3, 2024)),
        ("Apr 2024", (3, 2024)),
        ("abril 2024", (3, 2024)),
        ("ene 2025", (0, 2025)),
        ("septiembre 2024", (8, 2024)),
    ],
)
def test_parse_period(value, expected):
    assert parse_period(value) == expected


def test_parse_relative_periods():
    this_month = date.today().replace(day=1)
    last_month = this_month - relativedelta(months=1)
    next_month = this_month + relativedelta(months=1)

    assert parse_period("this month") == (this_month.month - 1, this_month.year)
    assert parse_period("last month") == (last_month.month - 1, last_month.year)
    assert parse_period("next month") == (next_month.month - 1, next_month.year)


@pytest.mark.parametrize("value", ["", "2024-13", "13/2024", "smarch 2024", "2024"])
def test_parse_invalid_period(value):
    with pytest.raises(ValueError):
        parse_period(value)

"""CLI helpers for accounting period resolution."""

from datetime import date

import click

from rentsheet.utils.date_parser import parse_period


def period_options(func):
    """Add the shared --month/--year/--period options to a command."""
    func = click.option(
        "--period",
        help="Period like '2024-04', '04/2024', 'april 2024' or 'last month'",
    )(func)
    func = click.option("--year", type=int, help="Year (defaults to the current year)")(func)
    func = click.option(
        "--month", type=click.IntRange(1, 12), help="Month number 1-12 (defaults to the current month)"
    )(func)
    return func


def resolve_cli_period(
    ctx,
    *,
    month: int | None,
    year: int | None,
    period: str | None,
    today: date | None = None,
) -> tuple[int, int]:
    """Resolve CLI period options into a zero-based (month, year) pair.

    --period cannot be combined with --month/--year. Missing parts default
    to the current month and year.
    """
    if period and (month is not None or year is not None):
        click.echo(
            "Error: --period cannot be combined with --month or --year.",
            err=True,
        )
        ctx.exit(1)

    if period:
        try:
            return parse_period(period)
        except ValueError as e:
            click.echo(f"Error: Invalid period: {e}", err=True)
            ctx.exit(1)

    today = today or date.today()
    resolved_month = month - 1 if month is not None else today.month - 1
    resolved_year = year if year is not None else today.year
    return resolved_month, resolved_year

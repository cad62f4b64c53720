"""Monthly sheet, yearly summary and rent status commands."""

from datetime import date

import click
from rentsheet.cli.error_handling import handle_domain_error
from rentsheet.cli.period_options import period_options, resolve_cli_period
from rentsheet.cli.property_resolution import resolve_property_or_exit
from rentsheet.domain.entities import RentState, Settlement, SettlementStatus
from rentsheet.domain.errors import DomainError
from rentsheet.domain.periods import month_name
from rentsheet.domain.property import PropertyService
from rentsheet.domain.rent_status import RentStatusService
from rentsheet.utils.amount_parser import format_currency

MONTH_ABBREVIATIONS = ["Ene", "Feb", "Mar", "Abr", "May", "Jun", "Jul", "Ago", "Sep", "Oct", "Nov", "Dic"]


def _cell(amount: float) -> str:
    return f"{round(amount):,d}".replace(",", ".").rjust(10)


def settlement_sentence(settlement: Settlement) -> str:
    """Describe the transfer that closes the month."""
    if settlement.status == SettlementStatus.EVEN:
        return "Accounts settled"
    if settlement.status == SettlementStatus.I_PAY:
        return f"Transfer to your sister: {format_currency(settlement.transfer_amount)}"
    return f"Your sister owes you: {format_currency(settlement.transfer_amount)}"


@click.command("sheet")
@period_options
@click.option("--details", is_flag=True, help="List the matched transactions of each property")
@click.pass_context
def monthly_sheet(ctx, month: int | None, year: int | None, period: str | None, details: bool):
    """Show the monthly sheet with the settlement between partners.

    Income counts for the month it is attributed to; expenses count for
    their period, or for their date when they have none.

    Examples:
        rentsheet sheet
        rentsheet sheet --month 4 --year 2024
        rentsheet sheet --period "last month"
    """
    app = ctx.obj["app"]
    sheet_month, sheet_year = resolve_cli_period(ctx, month=month, year=year, period=period)
    sheet = app.monthly_sheet(sheet_month, sheet_year)

    click.echo(f"\n{month_name(sheet.month).capitalize()} {sheet.year}")
    click.echo("=" * 110)
    click.echo(f"{'Property':28s} {'Income':>14s} {'Expenses':>14s} {'Net':>14s}   Services")
    click.echo("-" * 110)
    for row in sheet.rows:
        flags = " ".join(
            f"{service.value}:{'SI' if paid else 'NO'}" for service, paid in row.services.items()
        )
        click.echo(
            f"{row.property.name[:28]:28s} {format_currency(row.income):>14s} "
            f"{format_currency(row.total_expense):>14s} {format_currency(row.net):>14s}   {flags}"
        )
        if details:
            if row.income_transaction is not None:
                txn = row.income_transaction
                click.echo(f"    + {txn.date} {format_currency(txn.amount):>12s} {txn.handled_by.value:6s} {txn.description}")
            for txn in row.expenses:
                label = txn.category.value if txn.category else "EXPENSE"
                click.echo(
                    f"    - {txn.date} {format_currency(txn.amount):>12s} {txn.handled_by.value:6s} "
                    f"{label} {txn.description}".rstrip()
                )
    click.echo("-" * 110)
    click.echo(
        f"{'TOTAL':28s} {format_currency(sheet.global_income):>14s} "
        f"{format_currency(sheet.global_expense):>14s} {format_currency(sheet.global_net):>14s}"
    )

    settlement = sheet.settlement
    click.echo("\nSettlement:")
    click.echo(f"  Each partner's share: {format_currency(settlement.target_share)}")
    click.echo(f"  Cash held by me:      {format_currency(settlement.my_cash)}")
    click.echo(f"  Cash held by sister:  {format_currency(settlement.sister_cash)}")
    click.echo(f"  {settlement_sentence(settlement)}")


@click.command("year")
@click.option("--year", type=int, help="Year (defaults to the current year)")
@click.pass_context
def yearly_summary(ctx, year: int | None):
    """Show the yearly net of each property, month by month.

    Income counts for the month it is attributed to; expenses count for the
    month of their date.
    """
    app = ctx.obj["app"]
    summary = app.yearly_summary(year if year is not None else date.today().year)

    width = 22 + 10 * 13
    click.echo(f"\nYear {summary.year} (net per month)")
    click.echo("=" * width)
    header = "".join(f"{abbr:>10s}" for abbr in MONTH_ABBREVIATIONS)
    click.echo(f"{'Property':22s}{header}{'Total':>10s}")
    click.echo("-" * width)
    for row in summary.rows:
        cells = "".join(_cell(m.net) for m in row.months)
        click.echo(f"{row.property.name[:22]:22s}{cells}{_cell(row.total_net)}")
    click.echo("-" * width)
    cells = "".join(_cell(net) for net in summary.monthly_totals)
    click.echo(f"{'TOTAL':22s}{cells}{_cell(summary.grand_total)}")


@click.command("rent-status")
@click.argument("property_ref", metavar="PROPERTY")
@click.option("--year", type=int, help="Year (defaults to the current year)")
@click.pass_context
def rent_status(ctx, property_ref: str, year: int | None):
    """Show which months' rent was collected for a property.

    Examples:
        rentsheet rent-status "Depto Centro"
        rentsheet rent-status 1 --year 2024
    """
    app = ctx.obj["app"]
    prop = resolve_property_or_exit(ctx, PropertyService(app.state), property_ref)
    status_year = year if year is not None else date.today().year

    try:
        statuses = RentStatusService().year_status(app.state, prop.id, status_year)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nRent status of '{prop.name}' for {status_year}:")
    click.echo("-" * 60)
    for status in statuses:
        line = f"{month_name(status.month).capitalize():12s} {status.state.value:8s} due {status.due_date}"
        if status.state == RentState.PAID and status.transaction is not None:
            line += f"  ({format_currency(status.transaction.amount)} on {status.transaction.date})"
        click.echo(line)


def register_commands(cli):
    """Register sheet commands with main CLI."""
    cli.add_command(monthly_sheet)
    cli.add_command(yearly_summary)
    cli.add_command(rent_status)

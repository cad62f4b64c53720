"""Transaction commands."""

import click
from rentsheet.cli.error_handling import handle_domain_error
from rentsheet.cli.period_options import period_options, resolve_cli_period
from rentsheet.cli.property_resolution import resolve_property_or_exit
from rentsheet.domain.entities import ExpenseCategory, TransactionAgent, TransactionType
from rentsheet.domain.errors import DomainError
from rentsheet.domain.periods import month_name
from rentsheet.domain.property import PropertyService
from rentsheet.domain.transaction import TransactionService
from rentsheet.utils.amount_parser import format_currency, parse_amount
from rentsheet.utils.date_parser import parse_date

CATEGORY_CHOICES = [category.value for category in ExpenseCategory]
HANDLER_CHOICES = [agent.value for agent in TransactionAgent]


def _describe(txn, property_names: dict[str, str]) -> str:
    """One-line rendering of a transaction."""
    kind = "+" if txn.is_income else "-"
    detail = txn.description
    if txn.is_expense and txn.category:
        detail = f"{txn.category.value}: {detail}" if detail else txn.category.value
    period = f"{txn.rent_month + 1:02d}/{txn.rent_year}" if txn.has_period else "-"
    return (
        f"{txn.id:10s} | {txn.date} | {property_names.get(txn.property_id, 'Unknown'):24s} "
        f"| {kind}{format_currency(txn.amount):>13s} | {period:7s} "
        f"| {txn.handled_by.value:6s} | {detail}"
    )


@click.command("add")
@click.option("--property", "property_ref", required=True, help="Property name or ID")
@click.option(
    "--income/--expense",
    "is_income",
    default=True,
    help="Record a rent income (default) or an expense",
)
@period_options
@click.option("--date", help="Transaction date (YYYY-MM-DD, DD/MM/YYYY or 'today', 'yesterday')")
@click.option("--amount", help="Amount (defaults to the rent for income, 0 for expenses)")
@click.option("--description", help="Transaction description")
@click.option(
    "--category",
    type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
    help="Expense category (defaults to MAINTENANCE)",
)
@click.option(
    "--handler",
    type=click.Choice(HANDLER_CHOICES, case_sensitive=False),
    help="Who handled the cash (defaults to ME)",
)
@click.option("--no-period", is_flag=True, help="Don't attribute the movement to a period")
@click.pass_context
def add_transaction(
    ctx,
    property_ref: str,
    is_income: bool,
    month: int | None,
    year: int | None,
    period: str | None,
    date: str | None,
    amount: str | None,
    description: str | None,
    category: str | None,
    handler: str | None,
    no_period: bool,
):
    """Add a transaction for a property.

    Fields that aren't given take the same defaults as a new entry on the
    monthly sheet: income is the property's rent for the period, described
    as "Alquiler <mes>"; an expense is a maintenance cost of the period.

    Examples:
        rentsheet add --property "Depto Centro" --period 2024-04
        rentsheet add --property 1 --expense --amount 50000 --category REPAIR --handler SISTER
    """
    app = ctx.obj["app"]
    transaction_service = TransactionService(app.state)
    prop = resolve_property_or_exit(ctx, PropertyService(app.state), property_ref)
    txn_month, txn_year = resolve_cli_period(ctx, month=month, year=year, period=period)

    txn_type = TransactionType.INCOME if is_income else TransactionType.EXPENSE
    try:
        fields = transaction_service.draft_for_sheet(prop.id, txn_type, txn_month, txn_year)
    except DomainError as e:
        handle_domain_error(ctx, e)

    # Parse date
    if date is not None:
        try:
            fields["date"] = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    # Parse amount
    if amount is not None:
        try:
            fields["amount"] = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    if description is not None:
        fields["description"] = description
    if category is not None:
        if is_income:
            click.echo("Error: --category only applies to expenses", err=True)
            ctx.exit(1)
        fields["category"] = ExpenseCategory(category.upper())
    if handler is not None:
        fields["handled_by"] = TransactionAgent(handler.upper())
    if no_period:
        fields["rent_month"] = None
        fields["rent_year"] = None

    try:
        txn = app.add_transaction(**fields)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Property: {prop.name}")
    click.echo(f"  Type: {txn.type.value}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {format_currency(txn.amount)}")
    if txn.has_period:
        click.echo(f"  Period: {month_name(txn.rent_month)} {txn.rent_year}")
    if txn.category:
        click.echo(f"  Category: {txn.category.value}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    click.echo(f"  Handled by: {txn.handled_by.value}")


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("edit")
@click.argument("transaction_id")
@click.option("--property", "property_ref", help="Property name or ID")
@click.option("--type", "txn_type", type=click.Choice(["INCOME", "EXPENSE"], case_sensitive=False))
@click.option("--date", help="Transaction date (YYYY-MM-DD, DD/MM/YYYY or 'today', 'yesterday')")
@click.option("--amount", help="Transaction amount")
@click.option("--description", help="Transaction description")
@click.option("--category", type=click.Choice(CATEGORY_CHOICES, case_sensitive=False))
@click.option("--handler", type=click.Choice(HANDLER_CHOICES, case_sensitive=False))
@click.option("--period", help="New accounting period (e.g., '2024-04')")
@click.option("--clear-period", is_flag=True, help="Remove the accounting period")
@click.pass_context
def edit_transaction(
    ctx,
    transaction_id: str,
    property_ref: str | None,
    txn_type: str | None,
    date: str | None,
    amount: str | None,
    description: str | None,
    category: str | None,
    handler: str | None,
    period: str | None,
    clear_period: bool,
) -> None:
    """Edit a transaction.

    Updates only the fields that are provided.

    Examples:
        rentsheet transaction edit a1b2c3d4e --amount 160000
        rentsheet transaction edit a1b2c3d4e --period 2024-05 --handler SISTER
        rentsheet transaction edit a1b2c3d4e --clear-period
    """
    app = ctx.obj["app"]

    if period and clear_period:
        click.echo("Error: --period cannot be combined with --clear-period.", err=True)
        ctx.exit(1)

    changes = {}
    if property_ref is not None:
        changes["property_id"] = resolve_property_or_exit(
            ctx, PropertyService(app.state), property_ref
        ).id
    if txn_type is not None:
        changes["type"] = TransactionType(txn_type.upper())

    # Parse date if provided
    if date is not None:
        try:
            changes["date"] = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    # Parse amount if provided
    if amount is not None:
        try:
            changes["amount"] = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    if description is not None:
        changes["description"] = description
    if category is not None:
        changes["category"] = ExpenseCategory(category.upper())
    if handler is not None:
        changes["handled_by"] = TransactionAgent(handler.upper())
    if period is not None:
        changes["rent_month"], changes["rent_year"] = resolve_cli_period(
            ctx, month=None, year=None, period=period
        )
    if clear_period:
        changes["rent_month"] = None
        changes["rent_year"] = None

    try:
        app.edit_transaction(transaction_id, **changes)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction."""
    app = ctx.obj["app"]
    service = TransactionService(app.state)

    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {txn.id} ({format_currency(txn.amount)} on {txn.date})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        app.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("list")
@period_options
@click.option("--all", "show_all", is_flag=True, help="List every transaction, ignoring the period")
@click.option("--property", "property_ref", help="Property name or ID")
@click.pass_context
def list_transactions(
    ctx,
    month: int | None,
    year: int | None,
    period: str | None,
    show_all: bool,
    property_ref: str | None,
):
    """List transactions of a month.

    A transaction is listed when its date falls in the month or when it is
    attributed to that month's period.
    """
    app = ctx.obj["app"]
    service = TransactionService(app.state)

    property_id = None
    if property_ref:
        property_id = resolve_property_or_exit(ctx, PropertyService(app.state), property_ref).id

    if show_all:
        transactions = service.list_transactions(property_id=property_id)
    else:
        txn_month, txn_year = resolve_cli_period(ctx, month=month, year=year, period=period)
        transactions = service.list_transactions(
            month=txn_month, year=txn_year, property_id=property_id
        )

    if not transactions:
        click.echo("No transactions found.")
        return

    property_names = {prop.id: prop.name for prop in app.state.properties}
    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    for txn in transactions:
        click.echo(_describe(txn, property_names))


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(add_transaction)
    cli.add_command(transaction_group, name="transaction")

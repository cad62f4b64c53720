"""Property management commands."""

import click
from rentsheet.cli.error_handling import handle_domain_error
from rentsheet.cli.property_resolution import resolve_property_or_exit
from rentsheet.domain.errors import DomainError
from rentsheet.domain.property import PropertyService
from rentsheet.utils.amount_parser import format_currency, parse_amount


@click.group()
def property_group():
    """Manage properties."""
    pass


@property_group.command("list")
@click.pass_context
def list_properties(ctx):
    """List all properties."""
    app = ctx.obj["app"]
    service = PropertyService(app.state)

    properties = service.list_properties()
    if not properties:
        click.echo("No properties found.")
        return

    click.echo("\nProperties:")
    click.echo("-" * 90)
    for prop in properties:
        if prop.is_common:
            click.echo(f"ID: {prop.id:22s} | {prop.name:28s} | (shared expenses)")
            continue
        click.echo(
            f"ID: {prop.id:22s} | {prop.name:28s} | Tenant: {prop.tenant_name or '-':16s} "
            f"| Rent: {format_currency(prop.rent_amount):>12s} | Due: {prop.due_day:2d}"
        )


@property_group.command("create")
@click.argument("name", metavar="PROPERTY_NAME")
@click.option("--address", default="", help="Street address")
@click.option("--tenant", default="", help="Tenant name")
@click.option("--rent", default="0", help="Monthly rent (e.g., 150000 or '$ 150.000')")
@click.option("--due-day", type=int, default=10, show_default=True, help="Day of month the rent is due")
@click.pass_context
def create_property(ctx, name: str, address: str, tenant: str, rent: str, due_day: int):
    """Create a new property.

    Examples:
        rentsheet property create "Depto Centro" --tenant "Juan Perez" --rent 150000
        rentsheet property create "Casa Norte" --address "Calle 12" --due-day 5
    """
    app = ctx.obj["app"]

    try:
        rent_amount = parse_amount(rent)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        prop = app.create_property(
            name=name,
            address=address,
            tenant_name=tenant,
            rent_amount=rent_amount,
            due_day=due_day,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created property '{prop.name}' (ID: {prop.id})")


@property_group.command("edit")
@click.argument("property_ref", metavar="PROPERTY")
@click.option("--name", help="New name")
@click.option("--address", help="New street address")
@click.option("--tenant", help="New tenant name")
@click.option("--rent", help="New monthly rent")
@click.option("--due-day", type=int, help="New due day")
@click.pass_context
def edit_property(
    ctx,
    property_ref: str,
    name: str | None,
    address: str | None,
    tenant: str | None,
    rent: str | None,
    due_day: int | None,
) -> None:
    """Edit a property.

    PROPERTY can be a property name or ID. Only the given fields change.

    Examples:
        rentsheet property edit "Depto Centro" --rent 180000
        rentsheet property edit 1 --tenant "Ana Gomez" --due-day 5
    """
    app = ctx.obj["app"]
    prop = resolve_property_or_exit(ctx, PropertyService(app.state), property_ref)

    rent_amount = None
    if rent is not None:
        try:
            rent_amount = parse_amount(rent)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        updated = app.edit_property(
            prop.id,
            name=name,
            address=address,
            tenant_name=tenant,
            rent_amount=rent_amount,
            due_day=due_day,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated property '{updated.name}'")


def register_commands(cli):
    """Register property commands with main CLI."""
    cli.add_command(property_group, name="property")

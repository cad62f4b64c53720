"""Service checklist commands."""

import click
from rentsheet.cli.error_handling import handle_domain_error
from rentsheet.cli.period_options import period_options, resolve_cli_period
from rentsheet.cli.property_resolution import resolve_property_or_exit
from rentsheet.domain.entities import ServiceType
from rentsheet.domain.errors import DomainError
from rentsheet.domain.periods import month_name
from rentsheet.domain.property import PropertyService
from rentsheet.domain.service_record import ServiceRecordService

SERVICE_CHOICES = [service.name for service in ServiceType]


def format_flags(services: dict[ServiceType, bool]) -> str:
    """Render service flags like 'Luz: SI  Gas: NO'."""
    return "  ".join(
        f"{service.value}: {'SI' if paid else 'NO'}" for service, paid in services.items()
    )


@click.group()
def service_group():
    """Track monthly service payments."""
    pass


@service_group.command("toggle")
@click.argument("property_ref", metavar="PROPERTY")
@click.argument("service_name", metavar="SERVICE", type=click.Choice(SERVICE_CHOICES, case_sensitive=False))
@period_options
@click.pass_context
def toggle_service(
    ctx,
    property_ref: str,
    service_name: str,
    month: int | None,
    year: int | None,
    period: str | None,
):
    """Mark a service as paid, or back to pending.

    Regular properties track LIGHT, GAS, WATER and ABL; the shared-expenses
    property tracks RENTAS and EXPENSAS_EXTRA.

    Examples:
        rentsheet service toggle "Depto Centro" GAS --period 2024-04
        rentsheet service toggle 1 light
    """
    app = ctx.obj["app"]
    prop = resolve_property_or_exit(ctx, PropertyService(app.state), property_ref)
    service_month, service_year = resolve_cli_period(ctx, month=month, year=year, period=period)
    service = ServiceType[service_name.upper()]

    try:
        record = app.toggle_service(prop.id, service_month, service_year, service)
    except DomainError as e:
        handle_domain_error(ctx, e)

    state = "paid" if record.services.get(service) else "pending"
    click.echo(
        f"{service.value} for '{prop.name}' ({month_name(service_month)} {service_year}) is now {state}"
    )


@service_group.command("show")
@period_options
@click.option("--property", "property_ref", help="Property name or ID")
@click.pass_context
def show_services(
    ctx,
    month: int | None,
    year: int | None,
    period: str | None,
    property_ref: str | None,
):
    """Show the service checklist of a month."""
    app = ctx.obj["app"]
    property_service = PropertyService(app.state)
    service = ServiceRecordService(app.state)
    service_month, service_year = resolve_cli_period(ctx, month=month, year=year, period=period)

    if property_ref:
        properties = [resolve_property_or_exit(ctx, property_service, property_ref)]
    else:
        properties = property_service.list_properties()

    click.echo(f"\nServices for {month_name(service_month)} {service_year}:")
    click.echo("-" * 80)
    for prop in properties:
        flags = service.get_services(prop.id, service_month, service_year)
        click.echo(f"{prop.name:28s} | {format_flags(flags)}")


def register_commands(cli):
    """Register service commands with main CLI."""
    cli.add_command(service_group, name="service")

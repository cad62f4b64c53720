"""Export and import commands."""

from pathlib import Path

import click
from rentsheet.cli.error_handling import handle_domain_error
from rentsheet.cli.period_options import period_options, resolve_cli_period
from rentsheet.domain.errors import InvalidSnapshotError
from rentsheet.domain.export import (
    TEMPLATE_FILENAME,
    ExportService,
    backup_filename,
    period_filename,
)
from rentsheet.domain.property import PropertyService


def _write_file(ctx, output: str | None, default_name: str, content: bytes) -> Path:
    """Write export content to OUTPUT, a directory, or the default name."""
    path = Path(output) if output else Path(default_name)
    if path.is_dir():
        path = path / default_name
    try:
        path.write_bytes(content)
    except OSError as e:
        click.echo(f"Error: Could not write {path}: {e}", err=True)
        ctx.exit(1)
    return path


@click.group()
def export_group():
    """Export reports and backups."""
    pass


@export_group.command("period")
@period_options
@click.option("--output", "-o", type=click.Path(), help="Output file or directory")
@click.pass_context
def export_period(ctx, month: int | None, year: int | None, period: str | None, output: str | None):
    """Export a month's transactions and service status as CSV.

    Examples:
        rentsheet export period --period 2024-04
        rentsheet export period --month 4 --year 2024 -o reports/
    """
    app = ctx.obj["app"]
    report_month, report_year = resolve_cli_period(ctx, month=month, year=year, period=period)

    content = ExportService().export_period(app.state, report_month, report_year)
    path = _write_file(ctx, output, period_filename(report_month, report_year), content)
    click.echo(f"Exported report to {path}")


@export_group.command("template")
@click.option("--output", "-o", type=click.Path(), help="Output file or directory")
@click.pass_context
def export_template(ctx, output: str | None):
    """Export a blank CSV template prefilled with every property."""
    app = ctx.obj["app"]
    properties = PropertyService(app.state).list_properties()

    content = ExportService().export_template(properties)
    path = _write_file(ctx, output, TEMPLATE_FILENAME, content)
    click.echo(f"Exported template to {path}")


@export_group.command("backup")
@click.option("--output", "-o", type=click.Path(), help="Output file or directory")
@click.pass_context
def export_backup(ctx, output: str | None):
    """Export the whole dataset as a JSON backup.

    The backup can be restored on another machine with 'rentsheet import'.
    """
    app = ctx.obj["app"]

    content = ExportService().export_full(app.state)
    path = _write_file(ctx, output, backup_filename(), content)
    click.echo(f"Exported backup to {path}")


@click.command("import")
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def import_backup(ctx, backup_file: str, yes: bool):
    """Replace all data with a JSON backup.

    The current data is left untouched if the file is invalid.
    """
    app = ctx.obj["app"]

    try:
        state = ExportService().import_full(Path(backup_file).read_bytes())
    except InvalidSnapshotError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Replace all current data with {len(state.properties)} properties "
        f"and {len(state.transactions)} transactions from the backup?"
    ):
        click.echo("Import cancelled.")
        return

    app.replace_state(state)
    click.echo("\nImport complete:")
    click.echo(f"  Properties: {len(state.properties)}")
    click.echo(f"  Transactions: {len(state.transactions)}")
    click.echo(f"  Service records: {len(state.service_records)}")


def register_commands(cli):
    """Register export and import commands with main CLI."""
    cli.add_command(export_group, name="export")
    cli.add_command(import_backup)

"""Main CLI entry point."""

from dataclasses import replace

import click
from rentsheet.app import RentApp
from rentsheet.config import Settings
from rentsheet.database.factories import create_remote_store, create_sqlite_store
from rentsheet.logging import setup_logging

# Import and register all commands at module level
from rentsheet.cli.commands import (
    data,
    property,
    service,
    sheet,
    sync,
    transaction,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides RENTSHEET_DB_PATH environment variable)",
    envvar="RENTSHEET_DB_PATH",
)
@click.option(
    "--remote-url",
    help="SQLAlchemy URL of the shared database (overrides RENTSHEET_REMOTE_URL)",
    envvar="RENTSHEET_REMOTE_URL",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (overrides RENTSHEET_LOG_LEVEL)",
    envvar="RENTSHEET_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, remote_url: str | None, log_level: str | None):
    """Rentsheet - Rental bookkeeping for two partners.

    Record rent and expenses per property, track monthly service payments
    and see how much cash one partner owes the other each month.
    """
    ctx.ensure_object(dict)

    # Load state only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is None:
        return

    try:
        settings = Settings.from_env()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    settings = replace(
        settings,
        db_path=db_path or settings.db_path,
        remote_url=remote_url or settings.remote_url,
        log_level=(log_level or settings.log_level).upper(),
    )
    setup_logging(settings.log_level)

    store = create_sqlite_store(database_path=settings.db_path)
    store.connect()
    store.initialize_schema()
    remote = create_remote_store(settings.remote_url, settings.document_id)

    app = RentApp(store, remote, settlement_threshold=settings.settlement_threshold)
    app.load()
    ctx.obj["settings"] = settings
    ctx.obj["app"] = app

    def close() -> None:
        app.close()
        store.disconnect()

    ctx.call_on_close(close)


# Register all commands
property.register_commands(cli)
transaction.register_commands(cli)
service.register_commands(cli)
sheet.register_commands(cli)
data.register_commands(cli)
sync.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

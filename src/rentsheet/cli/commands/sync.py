"""Shared remote document commands."""

import click
from rentsheet.domain.errors import SyncError


def _require_remote(ctx):
    app = ctx.obj["app"]
    if app.remote is None:
        click.echo(
            "Error: No shared database configured. Use --remote-url or RENTSHEET_REMOTE_URL.",
            err=True,
        )
        ctx.exit(1)
    return app


@click.group()
def sync_group():
    """Sync with the shared remote document."""
    pass


@sync_group.command("push")
@click.pass_context
def push(ctx):
    """Overwrite the shared document with the local data."""
    app = _require_remote(ctx)

    try:
        revision = app.remote.push(app.state)
    except SyncError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Pushed local data (revision {revision})")


@sync_group.command("pull")
@click.pass_context
def pull(ctx):
    """Replace the local data with the shared document."""
    app = _require_remote(ctx)

    try:
        state = app.remote.pull()
    except SyncError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if state is None:
        click.echo("The shared document is empty; nothing to pull.")
        return

    app.on_remote_snapshot(state)
    click.echo(
        f"Pulled {len(state.properties)} properties and {len(state.transactions)} transactions "
        f"(revision {app.remote.last_revision})"
    )


def register_commands(cli):
    """Register sync commands with main CLI."""
    cli.add_command(sync_group, name="sync")

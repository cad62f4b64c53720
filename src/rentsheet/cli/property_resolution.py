"""CLI helpers for property resolution."""

from __future__ import annotations

import click

from rentsheet.domain.entities import Property
from rentsheet.domain.errors import NotFoundError
from rentsheet.domain.property import PropertyService


def resolve_property_or_exit(ctx: click.Context, property_service: PropertyService, name_or_id: str) -> Property:
    """Resolve a property name or ID, or exit with a CLI error."""
    try:
        return property_service.find_property(name_or_id)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)

"""CLI commands for the saved draft slot."""

from __future__ import annotations

import click

from supply_orders.infrastructure.bootstrap import draft_repository
from supply_orders.infrastructure.cli.order_commands import echo_draft


@click.command("show")
def draft_show() -> None:
    """Show the saved draft, if any."""
    draft = draft_repository().load()
    if draft is None:
        click.echo("No saved draft.")
        return
    echo_draft(draft)


@click.command("discard")
def draft_discard() -> None:
    """Throw away the saved draft."""
    repo = draft_repository()
    if not repo.exists():
        click.echo("No saved draft.")
        return
    repo.discard()
    click.echo("Saved draft discarded.")

"""CLI commands for browsing submitted orders."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import click

from supply_orders.application.dto import DateGroupDTO, HistoryQuery
from supply_orders.application.show_history import ShowHistoryHandler
from supply_orders.domain.service.date_ranges import PRESETS
from supply_orders.infrastructure.bootstrap import order_repository


def _display_groups(groups: list[DateGroupDTO]) -> None:
    for group in groups:
        click.echo(f"== {group.header} ({group.date}) ==")
        for card in group.cards:
            suffix = " (추가발주)" if card.is_supplementary else ""
            click.echo(f"  {card.branch}{suffix}")
            for block in card.categories:
                click.echo(f"    [{block.label}]")
                for line in block.lines:
                    click.echo(f"      • {line}")
            if card.note:
                click.echo(f"    요청사항: {card.note}")
            click.echo(f"    등록일시: {card.submitted_at}")
        click.echo()


@click.command("history")
@click.option("--branch", default=None, help="Only this branch, e.g. '3번 지점'.")
@click.option(
    "--from",
    "date_from",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="First business date (inclusive).",
)
@click.option(
    "--to",
    "date_to",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Last business date (inclusive).",
)
@click.option(
    "--preset",
    type=click.Choice(sorted(PRESETS)),
    default=None,
    help="Quick range; overrides --from/--to.",
)
@click.option("--oldest-first", is_flag=True, default=False, help="Oldest dates first.")
def history(
    branch: str | None,
    date_from: datetime | None,
    date_to: datetime | None,
    preset: str | None,
    oldest_first: bool,
) -> None:
    """List submitted orders grouped by date (last year by default)."""
    query = HistoryQuery.default(date.today())
    if preset is not None:
        start, end = PRESETS[preset](date.today())
        query = replace(query, date_from=start, date_to=end)
    else:
        if date_from is not None:
            query = replace(query, date_from=date_from.date().isoformat())
        if date_to is not None:
            query = replace(query, date_to=date_to.date().isoformat())
    query = replace(query, branch=branch or None, descending=not oldest_first)

    groups = ShowHistoryHandler(order_repo=order_repository()).handle(query)
    if not groups:
        click.echo("No orders found.")
        return
    _display_groups(groups)

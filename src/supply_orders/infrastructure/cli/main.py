import click

from supply_orders.infrastructure.cli.catalog_commands import catalog
from supply_orders.infrastructure.cli.draft_commands import draft_discard, draft_show
from supply_orders.infrastructure.cli.history_commands import history
from supply_orders.infrastructure.cli.order_commands import order_new, order_submit
from supply_orders.infrastructure.config import load_settings
from supply_orders.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug logging.")
def cli(verbose: bool) -> None:
    """Branch supply orders"""
    settings = load_settings()
    configure_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_json,
    )


@cli.group()
def order() -> None:
    """Place orders."""


@cli.group()
def draft() -> None:
    """Manage the saved draft."""


# Register subcommands
order.add_command(order_new)
order.add_command(order_submit)
draft.add_command(draft_discard)
draft.add_command(draft_show)
cli.add_command(history)
cli.add_command(catalog)

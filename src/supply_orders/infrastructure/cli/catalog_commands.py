"""CLI command listing what can be ordered."""

from __future__ import annotations

import click

from supply_orders.domain.model.catalog import (
    BRANCHES,
    CATEGORY_ORDER,
    display_label,
    products_for,
    unit_for,
)


@click.command("catalog")
def catalog() -> None:
    """List categories, products and units, and the branches."""
    for category in CATEGORY_ORDER:
        click.echo(f"[{display_label(category)}]  ({category.name.lower()})")
        products = products_for(category)
        if not products:
            click.echo("  (free text)")
        for product in products:
            click.echo(f"  {product:<10} {unit_for(product)}")
    click.echo()
    click.echo("Branches: " + ", ".join(BRANCHES))

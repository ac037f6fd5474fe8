"""CLI commands for placing supply orders."""

from __future__ import annotations

from datetime import datetime

import click

from supply_orders.application.dto import row_line
from supply_orders.application.order_form import OrderFormSession
from supply_orders.domain.exceptions import DomainException, DraftRejectedError
from supply_orders.domain.model.catalog import (
    BRANCHES,
    Category,
    display_label,
    products_for,
)
from supply_orders.domain.model.draft import Draft
from supply_orders.domain.service.draft_validation import ValidationIssue
from supply_orders.infrastructure.bootstrap import order_form


def _parse_category(raw: str) -> Category:
    try:
        return Category.parse(raw)
    except DomainException as exc:
        raise click.BadParameter(str(exc))


def _parse_item(raw: str) -> tuple[Category, str, str]:
    """Parse '야채:무:3' (or 'vegetable:무:3') into its three parts."""
    if raw.count(":") < 2:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected 'Category:Product:Quantity'."
        )
    category, rest = raw.split(":", 1)
    product, quantity = rest.rsplit(":", 1)
    return _parse_category(category), product.strip(), quantity.strip()


def _rejection_message(session: OrderFormSession, exc: DraftRejectedError) -> str:
    if exc.issue.row_id is None:
        return exc.issue.message
    position = session.draft.position_of(exc.issue.row_id)
    return f"{exc.issue.message} (row {position})"


def echo_draft(draft: Draft) -> None:
    """Shared formatting for displaying a draft."""
    click.echo(f"Branch: {draft.branch or '-'}")
    click.echo(f"Date:   {draft.date or '-'}")
    if not draft.items:
        click.echo("  (no items)")
    position = {row.id: i for i, row in enumerate(draft.items, start=1)}
    for category, rows in draft.rows_by_category():
        click.echo(f"  [{display_label(category)}]")
        for row in rows:
            click.echo(f"   {position[row.id]:>2}. {row_line(row) if row.product else '(product?)'}")
    if draft.note:
        click.echo(f"Note:   {draft.note}")


@click.command("submit")
@click.option("--branch", required=True, help="Branch label, e.g. '1번 지점'.")
@click.option(
    "--date",
    "order_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Business date (YYYY-MM-DD). Defaults to today.",
)
@click.option(
    "--item",
    "items",
    multiple=True,
    help="Item as 'Category:Product:Quantity'. Repeatable.",
)
@click.option("--note", default="", help="Free-text request for the supplier.")
def order_submit(
    branch: str, order_date: datetime | None, items: tuple[str, ...], note: str
) -> None:
    """Submit an order in one go."""
    parsed = [_parse_item(raw) for raw in items]

    session = order_form()
    session.set_branch(branch)
    if order_date is not None:
        session.set_date(order_date.date().isoformat())
    session.set_note(note)
    for category, product, quantity in parsed:
        row = session.add_row(category)
        session.choose_product(row.id, product)
        session.enter_quantity(row.id, quantity)

    try:
        record = session.submit()
    except DraftRejectedError as exc:
        raise click.ClickException(_rejection_message(session, exc))

    click.echo(f"Order #{record.id} submitted  ({record.branch}, {record.date})")


# --- Interactive wizard ---------------------------------------------------------


def _prompt_product(category: Category, default: str | None = None) -> str:
    if category.is_free_text:
        return click.prompt("Product", default=default or None)
    choices = products_for(category)
    return click.prompt(
        "Product",
        type=click.Choice(choices),
        default=default if default in choices else None,
    )


def _prompt_row(session: OrderFormSession) -> None:
    category = click.prompt(
        "Category (야채/양념/소스/기타)",
        default=Category.VEGETABLE.value,
        value_proc=_parse_category,
    )
    row = session.add_row(category)
    session.choose_product(row.id, _prompt_product(category))
    session.enter_quantity(row.id, click.prompt("Quantity", default="", show_default=False))


def _fix_rejected_row(session: OrderFormSession, issue: ValidationIssue) -> None:
    """Send the user straight to the field the last check complained about."""
    if issue.row_id is None:
        return
    row = session.draft.row(issue.row_id)
    position = session.draft.position_of(row.id)
    if issue.is_product_issue:
        click.echo(f"Row {position} needs a product.")
        session.choose_product(row.id, _prompt_product(row.category, row.product))
    elif issue.is_quantity_issue:
        click.echo(f"Row {position} ({row.product}) needs a quantity.")
        session.enter_quantity(row.id, click.prompt("Quantity", default="", show_default=False))


def _run_wizard(session: OrderFormSession) -> bool:
    """Drive the form until it is submitted (True) or abandoned (False)."""
    draft = session.draft
    session.set_branch(
        click.prompt(
            "Branch",
            type=click.Choice(BRANCHES),
            default=draft.branch if draft.branch in BRANCHES else None,
        )
    )
    session.set_date(
        click.prompt(
            "Date", type=click.DateTime(formats=["%Y-%m-%d"]), default=draft.date or None
        ).date().isoformat()
    )

    while True:
        click.echo()
        echo_draft(session.draft)
        action = click.prompt(
            "Action",
            type=click.Choice(["add", "remove", "note", "submit", "quit"]),
            default="add",
        )
        if action == "add":
            _prompt_row(session)
        elif action == "remove":
            if not session.draft.items:
                click.echo("Nothing to remove.")
                continue
            position = click.prompt(
                "Row number", type=click.IntRange(1, len(session.draft.items))
            )
            session.remove_row(session.draft.items[position - 1].id)
        elif action == "note":
            session.set_note(click.prompt("Note", default=session.draft.note or ""))
        elif action == "submit":
            issue = session.check()
            if issue is not None:
                click.echo(f"Error: {issue.message}", err=True)
                _fix_rejected_row(session, issue)
                continue
            if not click.confirm("이대로 주문하시겠습니까?", default=True):
                continue
            try:
                record = session.submit()
            except DraftRejectedError as exc:
                click.echo(f"Error: {_rejection_message(session, exc)}", err=True)
                continue
            click.echo(f"주문이 정상적으로 접수되었습니다. (Order #{record.id})")
            return True
        elif click.confirm("주문을 제출하지 않고 나가시겠습니까?", default=False):
            return False


@click.command("new")
def order_new() -> None:
    """Fill in a new order interactively."""
    session = order_form()
    if session.open():
        if click.confirm("임시저장된 내용이 있습니다. 불러올까요?", default=True):
            session.resume_draft()
        else:
            session.discard_draft()

    try:
        submitted = _run_wizard(session)
    except click.Abort:
        session.leave()
        click.echo("\nDraft saved.", err=True)
        raise
    except DomainException as exc:
        session.leave()
        raise click.ClickException(f"{exc} (draft saved)")

    if not submitted:
        session.leave()
        click.echo("Draft saved.")

"""Serialization of item rows, shared by the draft and order repositories.

Field names follow the layout already present in stored data.  Parsing is
strict: a wrong type raises, and the caller decides what to skip.
"""

from __future__ import annotations

from typing import Any

from supply_orders.domain.model.catalog import Category
from supply_orders.domain.model.order import ItemRow


def text(raw: dict, key: str, default: str | None = None) -> str:
    """Fetch a string field; missing fields take *default* if one is given."""
    value = raw.get(key, default)
    if value is None and default is not None:
        return default
    if not isinstance(value, str):
        raise TypeError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


def row_to_raw(row: ItemRow) -> dict[str, Any]:
    return {
        "id": row.id,
        "category": row.category.value,
        "product": row.product,
        "unit": row.unit,
        "quantity": row.quantity,
    }


def row_from_raw(raw: Any) -> ItemRow:
    if not isinstance(raw, dict):
        raise TypeError("Item row must be an object")
    return ItemRow(
        id=text(raw, "id"),
        category=Category.parse(text(raw, "category")),
        product=text(raw, "product", ""),
        unit=text(raw, "unit", ""),
        quantity=text(raw, "quantity", ""),
    )


def rows_from_raw(raw: Any) -> list[ItemRow]:
    if not isinstance(raw, list):
        raise TypeError("Items must be a list")
    return [row_from_raw(item) for item in raw]

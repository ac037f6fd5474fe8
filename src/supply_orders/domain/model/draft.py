"""The in-progress order being edited.

Exactly one draft exists at a time.  It is the only mutable working state
before submission; rows are addressed by their id.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date as date_type

from supply_orders.domain.exceptions import EntityNotFoundError
from supply_orders.domain.model.catalog import CATEGORY_ORDER, Category
from supply_orders.domain.model.order import ItemRow

_NON_DIGITS = re.compile(r"[^0-9]")


def digits_only(raw: str) -> str:
    """Strip everything but ASCII digits, as the quantity field does on entry."""
    return _NON_DIGITS.sub("", raw)


@dataclass
class Draft:
    branch: str = ""
    date: str = ""
    items: list[ItemRow] = field(default_factory=list)
    note: str = ""

    @staticmethod
    def fresh(today: date_type) -> Draft:
        """An empty draft dated *today*."""
        return Draft(date=today.isoformat())

    # --- Row editing ----------------------------------------------------------

    def add_row(self, category: Category) -> ItemRow:
        row = ItemRow.blank(category)
        self.items.append(row)
        return row

    def remove_row(self, row_id: str) -> None:
        self.items.pop(self._index_of(row_id))

    def set_product(self, row_id: str, product: str) -> ItemRow:
        """Set the product of a row; its unit follows from the catalog."""
        idx = self._index_of(row_id)
        self.items[idx] = self.items[idx].with_product(product)
        return self.items[idx]

    def set_quantity(self, row_id: str, raw: str) -> ItemRow:
        """Set the quantity of a row.

        Catalog categories only accept digits, so anything else is dropped
        on entry.  Free-text rows keep the value as typed.
        """
        idx = self._index_of(row_id)
        row = self.items[idx]
        value = raw if row.category.is_free_text else digits_only(raw)
        self.items[idx] = row.with_quantity(value)
        return self.items[idx]

    def row(self, row_id: str) -> ItemRow:
        return self.items[self._index_of(row_id)]

    def position_of(self, row_id: str) -> int:
        """1-based position of a row within the whole draft."""
        return self._index_of(row_id) + 1

    # --- Views ----------------------------------------------------------------

    def rows_by_category(self) -> list[tuple[Category, list[ItemRow]]]:
        """Non-empty categories in display order with their rows."""
        return group_rows(self.items)

    @property
    def is_blank(self) -> bool:
        return not self.branch and not self.items and not self.note

    # --- Internal helpers -----------------------------------------------------

    def _index_of(self, row_id: str) -> int:
        for i, row in enumerate(self.items):
            if row.id == row_id:
                return i
        raise EntityNotFoundError(f"Row '{row_id}' not found in this draft")


def group_rows(rows) -> list[tuple[Category, list[ItemRow]]]:
    grouped: dict[Category, list[ItemRow]] = {}
    for row in rows:
        grouped.setdefault(row.category, []).append(row)
    return [(cat, grouped[cat]) for cat in CATEGORY_ORDER if cat in grouped]

"""Order entities: item rows and submitted order records.

An ``ItemRow`` is one line of a supply order.  Rows are immutable values;
the draft replaces a row in place when the user edits it.  An
``OrderRecord`` is the frozen snapshot of a draft taken at submission time
and is never modified afterwards.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, replace
from datetime import datetime

from supply_orders.domain.model.catalog import Category, unit_for


def _new_row_id() -> str:
    return f"{time.time_ns() // 1_000_000}-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class ItemRow:
    """One requested product line.

    ``quantity`` stays a string: miscellaneous rows may carry free text
    such as "2박스", and an empty string means "not entered yet", never zero.
    ``unit`` is informational and derived from the catalog.
    """

    id: str
    category: Category
    product: str = ""
    unit: str = ""
    quantity: str = ""

    @staticmethod
    def blank(category: Category) -> ItemRow:
        """A fresh, empty row as created by pressing a category button."""
        return ItemRow(id=_new_row_id(), category=category)

    def with_product(self, product: str) -> ItemRow:
        return replace(self, product=product, unit=unit_for(product))

    def with_quantity(self, quantity: str) -> ItemRow:
        return replace(self, quantity=quantity)


@dataclass(frozen=True)
class OrderRecord:
    """A submitted order.

    ``created_at`` is epoch milliseconds and is the authoritative ordering
    key.  ``date`` is the business date chosen by the user; it is neither
    unique nor monotonic.  ``created_at`` is ``None`` only for legacy
    records stored before it existed; see :func:`creation_time`.
    """

    id: int
    branch: str
    date: str
    items: tuple[ItemRow, ...]
    note: str = ""
    submitted_at: str = ""
    created_at: int | None = None

    @property
    def is_legacy(self) -> bool:
        return self.created_at is None


def creation_time(record: OrderRecord) -> float | None:
    """Effective creation time in epoch milliseconds.

    Legacy records without ``created_at`` fall back to local midnight of
    their business ``date``.  Returns ``None`` when that fallback cannot be
    parsed either.
    """
    if not record.is_legacy:
        return float(record.created_at)
    try:
        midnight = datetime.fromisoformat(f"{record.date}T00:00:00")
    except (TypeError, ValueError):
        return None
    return midnight.timestamp() * 1000


def epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


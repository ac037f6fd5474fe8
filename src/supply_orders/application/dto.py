"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from supply_orders.domain.model.order import ItemRow
from supply_orders.domain.service.date_ranges import default_range


@dataclass(frozen=True)
class HistoryQuery:
    """Input: filter and sort controls of the history view."""

    branch: str | None = None
    date_from: str | None = None
    date_to: str | None = None
    descending: bool = True

    @staticmethod
    def default(today: date) -> HistoryQuery:
        """All branches, the last year, newest first."""
        date_from, date_to = default_range(today)
        return HistoryQuery(date_from=date_from, date_to=date_to)


@dataclass(frozen=True)
class CategoryLinesDTO:
    """Output: the rows of one category inside an order card."""

    label: str
    lines: list[str]


@dataclass(frozen=True)
class OrderCardDTO:
    """Output: one submitted order as displayed in the history."""

    id: int
    branch: str
    date: str
    is_supplementary: bool
    categories: list[CategoryLinesDTO]
    note: str
    submitted_at: str


@dataclass(frozen=True)
class DateGroupDTO:
    """Output: all cards for one business date."""

    date: str
    header: str  # e.g. "06/03"
    cards: list[OrderCardDTO]


def row_line(row: ItemRow) -> str:
    """'무 3 박스' from product, quantity and unit when known."""
    line = f"{row.product} {row.quantity}"
    if row.unit:
        line += f" {row.unit}"
    return line

"""Tracks which row field the user must fix next.

At most one quantity error and one product error are held at a time.
Marking a new row replaces the previous marker.  A marker is cleared only
by an edit to the *same* row that leaves the relevant field non-blank;
edits to other rows leave it alone.  Observers are told after every change
so a front end can move highlight and scroll position.
"""

from __future__ import annotations

from typing import Callable

Listener = Callable[["ErrorFocus"], None]


class ErrorFocus:

    def __init__(self) -> None:
        self._quantity_row: str | None = None
        self._product_row: str | None = None
        self._listeners: list[Listener] = []

    @property
    def quantity_error_row(self) -> str | None:
        return self._quantity_row

    @property
    def product_error_row(self) -> str | None:
        return self._product_row

    # --- Marking --------------------------------------------------------------

    def mark_invalid_quantity(self, row_id: str) -> None:
        self._quantity_row = row_id
        self._notify()

    def mark_invalid_product(self, row_id: str) -> None:
        self._product_row = row_id
        self._notify()

    def clear(self) -> None:
        if self._quantity_row is None and self._product_row is None:
            return
        self._quantity_row = None
        self._product_row = None
        self._notify()

    # --- Corrective edits -----------------------------------------------------

    def product_edited(self, row_id: str, value: str) -> None:
        if self._product_row == row_id and value.strip():
            self._product_row = None
            self._notify()

    def quantity_edited(self, row_id: str, value: str) -> None:
        if self._quantity_row == row_id and value.strip():
            self._quantity_row = None
            self._notify()

    # --- Observers ------------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

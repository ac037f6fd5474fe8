"""Application service: the order form.

``OrderFormSession`` owns the single working Draft and its ErrorFocus and
is the only way a front end changes them.  Every edit goes through here
so that corrective edits clear the matching error marker, and observers
registered with ``subscribe`` see every change.

Typical flow::

    session = OrderFormSession(order_repo, draft_repo)
    if session.open():
        session.resume_draft()      # or session.discard_draft()
    row = session.add_row(Category.VEGETABLE)
    session.choose_product(row.id, "무")
    session.enter_quantity(row.id, "3")
    session.set_branch("1번 지점")
    record = session.submit()       # raises DraftRejectedError on bad input
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from supply_orders.application.submit_order import SubmitOrderHandler
from supply_orders.domain.exceptions import DraftRejectedError
from supply_orders.domain.model.catalog import Category
from supply_orders.domain.model.draft import Draft
from supply_orders.domain.model.order import ItemRow, OrderRecord
from supply_orders.domain.repository.draft_repository import DraftRepository
from supply_orders.domain.repository.order_repository import OrderRepository
from supply_orders.domain.service.draft_validation import (
    ValidationIssue,
    validate_draft,
)
from supply_orders.domain.service.error_focus import ErrorFocus

logger = logging.getLogger(__name__)

DraftListener = Callable[[Draft], None]


class OrderFormSession:

    def __init__(
        self,
        order_repo: OrderRepository,
        draft_repo: DraftRepository,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._draft_repo = draft_repo
        self._clock = clock
        self._submit = SubmitOrderHandler(order_repo, draft_repo, clock)
        self._draft = self._fresh()
        self._listeners: list[DraftListener] = []
        self.focus = ErrorFocus()

    @property
    def draft(self) -> Draft:
        return self._draft

    # --- Entering and leaving the form ----------------------------------------

    def open(self) -> bool:
        """Enter the form.

        Returns True when a saved draft is waiting; the caller must then
        choose ``resume_draft()`` or ``discard_draft()``.  Otherwise the
        form starts from a fresh draft.
        """
        if self._draft_repo.exists():
            return True
        self._replace(self._fresh())
        return False

    def resume_draft(self) -> Draft:
        saved = self._draft_repo.load()
        if saved is None:
            logger.info("No usable saved draft; starting fresh")
            saved = self._fresh()
        self._replace(saved)
        return self._draft

    def discard_draft(self) -> None:
        self._draft_repo.discard()
        self._replace(self._fresh())

    def leave(self) -> None:
        """Abandon the form, keeping its contents in the draft slot."""
        self._draft_repo.save(self._draft)

    # --- Header fields --------------------------------------------------------

    def set_branch(self, branch: str) -> None:
        self._draft.branch = branch
        self._changed()

    def set_date(self, iso_date: str) -> None:
        self._draft.date = iso_date
        self._changed()

    def set_note(self, note: str) -> None:
        self._draft.note = note
        self._changed()

    # --- Rows -----------------------------------------------------------------

    def add_row(self, category: Category) -> ItemRow:
        row = self._draft.add_row(category)
        self._changed()
        return row

    def remove_row(self, row_id: str) -> None:
        self._draft.remove_row(row_id)
        self._changed()

    def choose_product(self, row_id: str, product: str) -> ItemRow:
        row = self._draft.set_product(row_id, product)
        self.focus.product_edited(row_id, row.product)
        self._changed()
        return row

    def enter_quantity(self, row_id: str, raw: str) -> ItemRow:
        row = self._draft.set_quantity(row_id, raw)
        self.focus.quantity_edited(row_id, row.quantity)
        self._changed()
        return row

    # --- Submission -----------------------------------------------------------

    def check(self) -> ValidationIssue | None:
        """Validate the draft and point the error focus at the culprit."""
        issue = validate_draft(self._draft)
        if issue is None:
            self.focus.clear()
        elif issue.row_id is not None and issue.is_product_issue:
            self.focus.mark_invalid_product(issue.row_id)
        elif issue.row_id is not None and issue.is_quantity_issue:
            self.focus.mark_invalid_quantity(issue.row_id)
        return issue

    def submit(self) -> OrderRecord:
        issue = self.check()
        if issue is not None:
            raise DraftRejectedError(issue)
        record = self._submit.handle(self._draft)
        self._replace(self._fresh())
        return record

    # --- Observers ------------------------------------------------------------

    def subscribe(self, listener: DraftListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: DraftListener) -> None:
        self._listeners.remove(listener)

    # --- Internal helpers -----------------------------------------------------

    def _fresh(self) -> Draft:
        return Draft.fresh(self._clock().date())

    def _replace(self, draft: Draft) -> None:
        self._draft = draft
        self.focus.clear()
        self._changed()

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self._draft)

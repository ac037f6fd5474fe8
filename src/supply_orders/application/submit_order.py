"""Application service: Submit Order use case.

Validates the draft, freezes it into an OrderRecord, appends it to the
order log and clears the saved draft slot.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from supply_orders.domain.exceptions import DraftRejectedError
from supply_orders.domain.model.draft import Draft
from supply_orders.domain.model.order import OrderRecord, epoch_millis
from supply_orders.domain.repository.draft_repository import DraftRepository
from supply_orders.domain.repository.order_repository import OrderRepository
from supply_orders.domain.service.draft_validation import validate_draft

logger = logging.getLogger(__name__)

SUBMITTED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


class SubmitOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        draft_repo: DraftRepository,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._order_repo = order_repo
        self._draft_repo = draft_repo
        self._clock = clock

    def handle(self, draft: Draft) -> OrderRecord:
        """Submit *draft* as a new order.

        Raises DraftRejectedError carrying the first failing check; nothing
        is persisted in that case.
        """
        issue = validate_draft(draft)
        if issue is not None:
            raise DraftRejectedError(issue)

        now = self._clock()
        created_at = epoch_millis(now)
        record = OrderRecord(
            id=self._order_repo.next_id(created_at),
            branch=draft.branch,
            date=draft.date,
            items=tuple(draft.items),  # rows are immutable values
            note=draft.note,
            submitted_at=now.strftime(SUBMITTED_AT_FORMAT),
            created_at=created_at,
        )

        self._order_repo.append(record)
        self._draft_repo.discard()
        logger.info(
            "Order #%s submitted for %s (%s, %d row(s))",
            record.id,
            record.branch,
            record.date,
            len(record.items),
        )
        return record

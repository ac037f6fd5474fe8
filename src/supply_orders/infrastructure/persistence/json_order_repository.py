"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from supply_orders.domain.exceptions import ValidationError
from supply_orders.domain.model.order import OrderRecord
from supply_orders.domain.repository.order_repository import OrderRepository
from supply_orders.domain.service.retention import prune_expired
from supply_orders.infrastructure.persistence.json_slot import JsonSlot
from supply_orders.infrastructure.persistence.row_codec import (
    row_to_raw,
    rows_from_raw,
    text,
)

logger = logging.getLogger(__name__)

ORDERS_KEY = "orders_store_v1"


class JsonOrderRepository(OrderRepository):

    def __init__(
        self,
        directory: Path,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._slot = JsonSlot(directory, ORDERS_KEY)
        self._clock = clock
        self._records: list[OrderRecord] | None = None

    # --- OrderRepository interface --------------------------------------------

    def load_all(self) -> list[OrderRecord]:
        return list(self._retained())

    def append(self, record: OrderRecord) -> None:
        records = self._loaded()
        records.append(record)
        self._persist(records)
        logger.debug("Appended order #%s for %s", record.id, record.branch)

    def next_id(self, created_at: int) -> int:
        records = self._loaded()
        if not records:
            return created_at
        return max(created_at, max(r.id for r in records) + 1)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: OrderRecord) -> dict:
        raw: dict[str, Any] = {
            "id": record.id,
            "branch": record.branch,
            "date": record.date,
            "items": [row_to_raw(row) for row in record.items],
            "note": record.note,
            "submittedAt": record.submitted_at,
        }
        if record.created_at is not None:
            raw["createdAt"] = record.created_at
        return raw

    @staticmethod
    def _to_domain(raw: Any) -> OrderRecord:
        if not isinstance(raw, dict):
            raise TypeError("Order must be an object")
        order_id = raw.get("id")
        if isinstance(order_id, bool) or not isinstance(order_id, (int, float)):
            raise TypeError("Order id must be a number")
        created_at = raw.get("createdAt")
        if created_at is not None and (
            isinstance(created_at, bool) or not isinstance(created_at, (int, float))
        ):
            raise TypeError("createdAt must be a number")
        return OrderRecord(
            id=int(order_id),
            branch=text(raw, "branch"),
            date=text(raw, "date"),
            items=tuple(rows_from_raw(raw.get("items", []))),
            note=text(raw, "note", ""),
            submitted_at=text(raw, "submittedAt", ""),
            created_at=None if created_at is None else int(created_at),
        )

    # --- File helpers ---------------------------------------------------------

    def _loaded(self) -> list[OrderRecord]:
        if self._records is None:
            return self._retained()
        return self._records

    def _retained(self) -> list[OrderRecord]:
        """Prune the working list, reading the file only on first use.

        After the first read the in-memory list is authoritative, so
        records whose write failed stay visible for the rest of the session.
        """
        stored = self._read() if self._records is None else self._records
        retained = prune_expired(stored, self._clock())
        if len(retained) != len(stored):
            logger.info(
                "Pruned %d expired order(s) from %s",
                len(stored) - len(retained),
                self._slot.key,
            )
            self._persist(retained)
        self._records = retained
        return retained

    def _read(self) -> list[OrderRecord]:
        raw = self._slot.read()
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Ignoring %s: expected a list of orders", self._slot.key)
            return []

        records: list[OrderRecord] = []
        for position, item in enumerate(raw):
            try:
                records.append(self._to_domain(item))
            except (KeyError, TypeError, ValueError, OverflowError, ValidationError) as exc:
                logger.warning(
                    "Skipping malformed order at position %d in %s: %s",
                    position,
                    self._slot.key,
                    exc,
                )
        return records

    def _persist(self, records: list[OrderRecord]) -> None:
        self._slot.write([self._to_raw(r) for r in records])

"""JSON-file-backed implementation of DraftRepository."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from supply_orders.domain.exceptions import ValidationError
from supply_orders.domain.model.draft import Draft
from supply_orders.domain.repository.draft_repository import DraftRepository
from supply_orders.infrastructure.persistence.json_slot import JsonSlot
from supply_orders.infrastructure.persistence.row_codec import (
    row_to_raw,
    rows_from_raw,
    text,
)

logger = logging.getLogger(__name__)

DRAFT_KEY = "order_draft_v5"


class JsonDraftRepository(DraftRepository):

    def __init__(self, directory: Path) -> None:
        self._slot = JsonSlot(directory, DRAFT_KEY)

    # --- DraftRepository interface --------------------------------------------

    def save(self, draft: Draft) -> None:
        if self._slot.write(self._to_raw(draft)):
            logger.debug("Saved draft with %d row(s)", len(draft.items))

    def load(self) -> Draft | None:
        raw = self._slot.read()
        if raw is None:
            return None
        try:
            return self._to_domain(raw)
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            logger.warning("Ignoring malformed draft in %s: %s", self._slot.key, exc)
            return None

    def discard(self) -> None:
        self._slot.remove()

    def exists(self) -> bool:
        return self._slot.exists()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(draft: Draft) -> dict:
        return {
            "branch": draft.branch,
            "date": draft.date,
            "items": [row_to_raw(row) for row in draft.items],
            "note": draft.note,
        }

    @staticmethod
    def _to_domain(raw: Any) -> Draft:
        if not isinstance(raw, dict):
            raise TypeError("Draft must be an object")
        return Draft(
            branch=text(raw, "branch", ""),
            date=text(raw, "date", ""),
            items=rows_from_raw(raw.get("items", [])),
            note=text(raw, "note", ""),
        )

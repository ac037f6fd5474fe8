"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from supply_orders.application.order_form import OrderFormSession
from supply_orders.infrastructure.config import load_settings
from supply_orders.infrastructure.persistence.json_draft_repository import (
    JsonDraftRepository,
)
from supply_orders.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(load_settings().data_dir)


def draft_repository() -> JsonDraftRepository:
    return JsonDraftRepository(load_settings().data_dir)


def order_form() -> OrderFormSession:
    return OrderFormSession(
        order_repo=order_repository(),
        draft_repo=draft_repository(),
    )

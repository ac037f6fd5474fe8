"""Application service: Show History use case (query)."""

from __future__ import annotations

from supply_orders.application.dto import (
    CategoryLinesDTO,
    DateGroupDTO,
    HistoryQuery,
    OrderCardDTO,
    row_line,
)
from supply_orders.domain.model.catalog import display_label
from supply_orders.domain.model.draft import group_rows
from supply_orders.domain.model.order import OrderRecord
from supply_orders.domain.repository.order_repository import OrderRepository
from supply_orders.domain.service.date_ranges import format_month_day
from supply_orders.domain.service.order_history import build_history


class ShowHistoryHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, query: HistoryQuery) -> list[DateGroupDTO]:
        groups = build_history(
            self._order_repo.load_all(),
            branch=query.branch,
            date_from=query.date_from,
            date_to=query.date_to,
            descending=query.descending,
        )
        return [
            DateGroupDTO(
                date=group.date,
                header=format_month_day(group.date),
                cards=[
                    self._to_card(order, supplementary)
                    for order, supplementary in group.entries()
                ],
            )
            for group in groups
        ]

    @staticmethod
    def _to_card(order: OrderRecord, is_supplementary: bool) -> OrderCardDTO:
        return OrderCardDTO(
            id=order.id,
            branch=order.branch,
            date=order.date,
            is_supplementary=is_supplementary,
            categories=[
                CategoryLinesDTO(
                    label=display_label(category),
                    lines=[row_line(row) for row in rows],
                )
                for category, rows in group_rows(order.items)
            ],
            note=order.note,
            submitted_at=order.submitted_at,
        )

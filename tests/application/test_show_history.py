"""Integration tests for the ShowHistory use case."""

from datetime import date, datetime, timedelta

from supply_orders.application.dto import HistoryQuery
from supply_orders.application.show_history import ShowHistoryHandler
from supply_orders.domain.model.catalog import Category
from supply_orders.domain.model.order import ItemRow, OrderRecord, epoch_millis
from tests.fakes import FakeOrderRepository

NOW = datetime(2025, 6, 10, 12, 0, 0)


def _order(order_id, branch, day, created_at, items=(), note=""):
    return OrderRecord(
        id=order_id,
        branch=branch,
        date=day,
        items=tuple(items),
        note=note,
        submitted_at="2025-06-10 12:00:00",
        created_at=created_at,
    )


def _rows():
    return [
        ItemRow(id="o", category=Category.OTHER, product="종이컵", quantity="2박스"),
        ItemRow(id="v", category=Category.VEGETABLE, product="무", unit="박스", quantity="3"),
    ]


class TestShowHistory:

    def test_cards_grouped_and_flagged(self):
        base = epoch_millis(NOW)
        repo = FakeOrderRepository(
            [
                _order(1, "1번 지점", "2025-06-01", base - 100),
                _order(2, "1번 지점", "2025-06-01", base - 200),
                _order(3, "2번 지점", "2025-06-02", base - 50),
            ],
            now=NOW,
        )
        groups = ShowHistoryHandler(repo).handle(HistoryQuery())
        assert [g.header for g in groups] == ["06/02", "06/01"]
        cards = groups[1].cards
        assert [(c.id, c.is_supplementary) for c in cards] == [(2, False), (1, True)]

    def test_item_lines_in_category_order(self):
        repo = FakeOrderRepository(
            [_order(1, "1번 지점", "2025-06-01", epoch_millis(NOW), _rows(), note="문 앞")],
            now=NOW,
        )
        (group,) = ShowHistoryHandler(repo).handle(HistoryQuery())
        (card,) = group.cards
        assert [(b.label, b.lines) for b in card.categories] == [
            ("야채", ["무 3 박스"]),
            ("잡화(기타)", ["종이컵 2박스"]),
        ]
        assert card.note == "문 앞"

    def test_expired_orders_not_shown(self):
        old = epoch_millis(NOW - timedelta(days=400))
        repo = FakeOrderRepository([_order(1, "1번 지점", "2024-05-01", old)], now=NOW)
        assert ShowHistoryHandler(repo).handle(HistoryQuery()) == []

    def test_default_query_covers_last_year(self):
        query = HistoryQuery.default(date(2025, 6, 10))
        assert (query.date_from, query.date_to) == ("2024-06-10", "2025-06-10")
        assert query.branch is None
        assert query.descending is True

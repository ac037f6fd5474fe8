"""Unit tests for the retention policy."""

from datetime import datetime, timedelta

from supply_orders.domain.model.order import OrderRecord, creation_time, epoch_millis
from supply_orders.domain.service.retention import prune_expired, retention_cutoff

NOW = datetime(2025, 6, 1, 12, 0, 0)


def _aged(order_id: int, days: int) -> OrderRecord:
    return OrderRecord(
        id=order_id,
        branch="1번 지점",
        date="2025-01-01",
        items=(),
        created_at=epoch_millis(NOW - timedelta(days=days)),
    )


class TestPrune:

    def test_old_dropped_recent_kept(self):
        kept = prune_expired([_aged(1, 400), _aged(2, 300)], NOW)
        assert [r.id for r in kept] == [2]

    def test_exactly_at_cutoff_is_kept(self):
        record = _aged(1, 365)
        assert prune_expired([record], NOW) == [record]

    def test_order_preserved(self):
        records = [_aged(3, 1), _aged(1, 2), _aged(2, 3)]
        assert [r.id for r in prune_expired(records, NOW)] == [3, 1, 2]

    def test_pruning_is_idempotent(self):
        once = prune_expired([_aged(1, 400), _aged(2, 10)], NOW)
        assert prune_expired(once, NOW) == once


class TestLegacyRecords:

    def test_missing_created_at_falls_back_to_midnight_of_date(self):
        record = OrderRecord(id=1, branch="b", date="2025-03-04", items=(), created_at=None)
        assert creation_time(record) == datetime(2025, 3, 4).timestamp() * 1000

    def test_legacy_record_aged_by_business_date(self):
        old = OrderRecord(id=1, branch="b", date="2024-01-01", items=(), created_at=None)
        recent = OrderRecord(id=2, branch="b", date="2025-05-01", items=(), created_at=None)
        assert [r.id for r in prune_expired([old, recent], NOW)] == [2]

    def test_unparseable_legacy_date_is_dropped(self):
        broken = OrderRecord(id=1, branch="b", date="someday", items=(), created_at=None)
        assert creation_time(broken) is None
        assert prune_expired([broken], NOW) == []


def test_cutoff_is_365_days_before_now():
    assert retention_cutoff(NOW) == epoch_millis(NOW - timedelta(days=365))

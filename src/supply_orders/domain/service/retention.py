"""Retention policy for the order log.

Orders older than the retention window are dropped when the log is
loaded.  Age is measured from the effective creation time, so legacy
records without ``created_at`` are aged from midnight of their business
date.  Records whose age cannot be determined at all are dropped.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from supply_orders.domain.model.order import OrderRecord, creation_time, epoch_millis

RETENTION_DAYS = 365
RETENTION_WINDOW = timedelta(days=RETENTION_DAYS)


def retention_cutoff(now: datetime) -> int:
    """Oldest creation time (epoch ms) that is still retained."""
    return epoch_millis(now) - int(RETENTION_WINDOW.total_seconds() * 1000)


def is_retained(record: OrderRecord, cutoff: int) -> bool:
    created = creation_time(record)
    return created is not None and created >= cutoff


def prune_expired(records: list[OrderRecord], now: datetime) -> list[OrderRecord]:
    """Return *records* without the expired ones, preserving order."""
    cutoff = retention_cutoff(now)
    return [r for r in records if is_retained(r, cutoff)]

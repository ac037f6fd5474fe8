"""Abstract repository for the submitted-order log.

Defined in the domain layer so the domain never depends on
infrastructure.  The log is append-only: the only removal is retention
pruning, applied when the log is loaded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from supply_orders.domain.model.order import OrderRecord


class OrderRepository(ABC):

    @abstractmethod
    def load_all(self) -> list[OrderRecord]:
        """Return every retained order, oldest appended first.

        Expired orders are pruned before returning; if any were pruned the
        backing store is rewritten straight away.
        """

    @abstractmethod
    def append(self, record: OrderRecord) -> None:
        """Add one order to the end of the log and persist the whole log."""

    @abstractmethod
    def next_id(self, created_at: int) -> int:
        """Generate an order ID, monotonic by creation time and unique."""

"""Abstract repository for the single saved draft."""

from __future__ import annotations

from abc import ABC, abstractmethod

from supply_orders.domain.model.draft import Draft


class DraftRepository(ABC):

    @abstractmethod
    def save(self, draft: Draft) -> None:
        """Store *draft*, replacing whatever was saved before."""

    @abstractmethod
    def load(self) -> Draft | None:
        """Return the saved draft, or None to start from a fresh one."""

    @abstractmethod
    def discard(self) -> None:
        """Forget the saved draft."""

    @abstractmethod
    def exists(self) -> bool:
        """True if a draft is waiting to be resumed."""

"""
Change Feed Ports

Owner-scoped stream of todo change events.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator
from uuid import UUID

from src.domain.entities import ChangeEvent


class ChangeSubscription(ABC):
    """Live handle on the feed. Must be closed by its owner."""

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[ChangeEvent]:
        pass

    @abstractmethod
    async def close(self) -> None:
        pass


class IChangeFeed(ABC):
    @abstractmethod
    async def publish(self, owner_id: UUID, event: ChangeEvent) -> int:
        """Deliver to every subscriber of owner_id. Returns delivery count."""
        pass

    @abstractmethod
    def subscribe(self, owner_id: UUID) -> ChangeSubscription:
        pass

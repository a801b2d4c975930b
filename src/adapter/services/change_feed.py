"""
In-process change feed.

Each subscription owns an asyncio queue; publishing fans an event out to
every queue registered for the owner. Suitable for a single worker process.
"""

import asyncio
import logging
from collections import defaultdict
from typing import AsyncIterator, Dict, Set
from uuid import UUID

from src.app.services.change_feed import ChangeSubscription, IChangeFeed
from src.domain.entities import ChangeEvent

logger = logging.getLogger(__name__)

_CLOSED = object()


class QueueSubscription(ChangeSubscription):
    def __init__(self, feed: "InMemoryChangeFeed", owner_id: UUID):
        self.feed = feed
        self.owner_id = owner_id
        self.queue: asyncio.Queue = asyncio.Queue()
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[ChangeEvent]:
        while True:
            item = await self.queue.get()
            if item is _CLOSED:
                return
            yield item

    def deliver(self, event: ChangeEvent) -> None:
        self.queue.put_nowait(event)

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.feed._unregister(self)
        self.queue.put_nowait(_CLOSED)


class InMemoryChangeFeed(IChangeFeed):
    def __init__(self):
        self._subscribers: Dict[UUID, Set[QueueSubscription]] = defaultdict(set)

    async def publish(self, owner_id: UUID, event: ChangeEvent) -> int:
        subscribers = list(self._subscribers.get(owner_id, ()))
        for subscription in subscribers:
            subscription.deliver(event)
        logger.debug(f"Published {event.kind.value} for {owner_id} to {len(subscribers)} subscriber(s)")
        return len(subscribers)

    def subscribe(self, owner_id: UUID) -> QueueSubscription:
        subscription = QueueSubscription(self, owner_id)
        self._subscribers[owner_id].add(subscription)
        return subscription

    def subscriber_count(self, owner_id: UUID) -> int:
        return len(self._subscribers.get(owner_id, ()))

    def _unregister(self, subscription: QueueSubscription) -> None:
        subscribers = self._subscribers.get(subscription.owner_id)
        if subscribers is None:
            return
        subscribers.discard(subscription)
        if not subscribers:
            del self._subscribers[subscription.owner_id]

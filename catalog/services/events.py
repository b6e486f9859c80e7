"""
Event Channel for GraphQL Subscriptions

In-process publish/subscribe used to push "book added" notifications to
clients subscribed over WebSocket.

Delivery semantics:
- Each subscriber gets its own asyncio.Queue, so every subscriber
  receives every event published while it is registered, exactly once,
  in publish order.
- Nothing is stored: an event published with no subscribers is dropped,
  and a subscriber never sees events published before it registered.
- In-process only; no fan-out to other server instances.

Usage:
    from catalog.services.events import EventType, PubSub

    pubsub = PubSub()

    # Subscription resolver
    async for book in pubsub.subscribe(EventType.BOOK_ADDED):
        yield book

    # Mutation resolver
    pubsub.publish(EventType.BOOK_ADDED, book)

One PubSub belongs to one application instance (app.state.events) and
reaches resolvers through the GraphQL context.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


# =============================================================================
# Event Types
# =============================================================================


class EventType(StrEnum):
    """Topics that can be published to."""

    BOOK_ADDED = "BOOK_ADDED"


# =============================================================================
# Publisher / Subscriber Registry
# =============================================================================


class PubSub:
    """
    Topic-keyed registry of subscriber queues.

    Attributes:
        _subscribers: Map of topic -> queues of currently registered
            subscribers
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[asyncio.Queue[Any]]] = {}

    def publish(self, topic: str, payload: Any) -> int:
        """
        Deliver a payload to every current subscriber of a topic.

        Args:
            topic: Topic to publish to
            payload: Value handed to each subscriber

        Returns:
            Number of subscribers the payload was queued for
        """
        queues = list(self._subscribers.get(topic, []))
        for queue in queues:
            queue.put_nowait(payload)

        if queues:
            logger.debug(f"Published to '{topic}': {len(queues)} subscribers")
        else:
            logger.debug(f"No subscribers for '{topic}', event dropped")

        return len(queues)

    async def subscribe(self, topic: str) -> AsyncGenerator[Any, None]:
        """
        Yield payloads published to a topic, as they arrive.

        The subscriber is registered when iteration starts and removed
        when the generator is closed or cancelled (client disconnect,
        server shutdown).
        """
        queue: asyncio.Queue[Any] = asyncio.Queue()
        self._subscribers.setdefault(topic, []).append(queue)
        logger.info(
            f"Subscriber registered on '{topic}' "
            f"(total={self.subscriber_count(topic)})"
        )

        try:
            while True:
                yield await queue.get()
        finally:
            self._remove(topic, queue)

    def _remove(self, topic: str, queue: asyncio.Queue[Any]) -> None:
        subscribers = self._subscribers.get(topic)
        if subscribers is None:
            return

        if queue in subscribers:
            subscribers.remove(queue)
        if not subscribers:
            del self._subscribers[topic]

        logger.info(
            f"Subscriber removed from '{topic}' "
            f"(total={self.subscriber_count(topic)})"
        )

    def subscriber_count(self, topic: str) -> int:
        """Get the number of subscribers registered on a topic."""
        return len(self._subscribers.get(topic, []))

    def get_stats(self) -> dict[str, int]:
        """Get subscriber counts per topic."""
        return {topic: len(queues) for topic, queues in self._subscribers.items()}

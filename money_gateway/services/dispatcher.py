"""
Notification Dispatcher.

In-process broadcaster for verified payment events. Every live listener
owns a bounded queue; publishing pushes the event into each queue without
awaiting, so registry changes and broadcasts never interleave on the
event loop.
"""
import asyncio
import logging
from typing import AsyncIterator

from money_gateway.models.payment import PAYMENT_VERIFIED, PaymentVerifiedEvent

logger = logging.getLogger(__name__)


class Subscription:
    """Handle for one registered listener."""

    def __init__(self, maxsize: int):
        self._queue: asyncio.Queue[PaymentVerifiedEvent | None] = asyncio.Queue(maxsize=maxsize)
        self.closed = False

    @property
    def pending(self) -> int:
        """Events queued but not yet read."""
        return self._queue.qsize()

    def deliver(self, event: PaymentVerifiedEvent) -> bool:
        """Queue an event. Returns False when the listener cannot take it."""
        if self.closed:
            return False
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            return False
        return True

    def close(self) -> None:
        """Stop delivery and wake any pending reader."""
        if self.closed:
            return
        self.closed = True
        try:
            self._queue.put_nowait(None)
        except asyncio.QueueFull:
            # Reader is behind; it sees `closed` after draining.
            pass

    async def get(self) -> PaymentVerifiedEvent | None:
        """Next event, or None once the subscription is closed."""
        if self.closed and self._queue.empty():
            return None
        event = await self._queue.get()
        if event is None or self.closed:
            return None
        return event

    def __aiter__(self) -> AsyncIterator[PaymentVerifiedEvent]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[PaymentVerifiedEvent]:
        while True:
            event = await self.get()
            if event is None:
                return
            yield event


class NotificationDispatcher:
    """Broadcasts payment events to every currently registered listener."""

    def __init__(self, queue_size: int = 100):
        self._queue_size = queue_size
        self._subscribers: set[Subscription] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> Subscription:
        """Register a new listener. Past events are not replayed."""
        subscription = Subscription(self._queue_size)
        self._subscribers.add(subscription)
        logger.info("Listener subscribed. Total listeners: %d", len(self._subscribers))
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a listener. Unknown handles are ignored."""
        subscription.close()
        if subscription in self._subscribers:
            self._subscribers.discard(subscription)
            logger.info("Listener unsubscribed. Total listeners: %d", len(self._subscribers))

    def publish(self, event: PaymentVerifiedEvent) -> int:
        """
        Deliver an event to all listeners.

        Listeners that are closed or too far behind are dropped. Never
        raises on account of a listener.

        Returns:
            Number of listeners the event was queued for.
        """
        delivered = 0
        for subscription in list(self._subscribers):
            if subscription.deliver(event):
                delivered += 1
            else:
                logger.warning("Dropping unresponsive listener")
                self._subscribers.discard(subscription)
                subscription.close()

        logger.info(
            "Published %s for order %s to %d listener(s)",
            PAYMENT_VERIFIED,
            event.order_id,
            delivered,
        )
        return delivered

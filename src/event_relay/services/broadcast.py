"""
Bounded broadcast topic for the Event Relay.

A single ring buffer holds the most recent events. Every subscriber owns a
read cursor (a sequence number) into that buffer, so all subscribers see
events in the same global arrival order without per-subscriber queues.

When a subscriber falls further behind than the buffer capacity, the events
it missed have already been evicted; the next read reports the gap as
``SubscriptionLagged`` instead of silently skipping ahead.

Publishing is synchronous and never suspends. All mutation happens on the
event loop thread.
"""
import asyncio
import logging
from collections import deque
from typing import Any, Deque, Generic, Optional, Set, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TopicClosed(Exception):
    """Raised when publishing to, subscribing to or reading from a closed topic."""


class SubscriptionLagged(Exception):
    """Raised when a subscriber missed events evicted from the ring buffer."""

    def __init__(self, missed: int):
        super().__init__(f"subscriber lagged behind by {missed} events")
        self.missed = missed


class BroadcastTopic(Generic[T]):
    """
    Fixed-capacity, single-topic broadcast channel.

    Events are numbered by a monotonically increasing sequence. The buffer
    retains the last ``capacity`` events, i.e. sequences in
    ``[tail - len(buffer), tail)``.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Topic capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._buffer: Deque[T] = deque(maxlen=capacity)
        self._tail = 0  # sequence number of the next event to be published
        self._subscriptions: Set["Subscription[T]"] = set()
        self._published = asyncio.Event()
        self._closed = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def receiver_count(self) -> int:
        """Number of open subscriptions."""
        return len(self._subscriptions)

    @property
    def published_count(self) -> int:
        """Total number of events ever published."""
        return self._tail

    @property
    def is_closed(self) -> bool:
        return self._closed

    def publish(self, event: T) -> int:
        """
        Append an event and wake every waiting subscriber.

        Returns:
            Number of subscriptions open at the moment of publish.
        """
        if self._closed:
            raise TopicClosed("topic is closed")

        self._buffer.append(event)
        self._tail += 1
        self._notify()
        return len(self._subscriptions)

    def subscribe(self) -> "Subscription[T]":
        """Open a subscription positioned at the current tail."""
        if self._closed:
            raise TopicClosed("topic is closed")

        subscription = Subscription(self, self._tail)
        self._subscriptions.add(subscription)
        logger.debug(f"Subscription opened at sequence {self._tail} ({len(self._subscriptions)} open)")
        return subscription

    def close(self) -> None:
        """Close the topic; pending and future reads raise TopicClosed."""
        if self._closed:
            return
        self._closed = True
        self._notify()
        logger.debug("Topic closed")

    def _notify(self) -> None:
        # Waiters hold a reference to the current event; swap before setting
        # so that later waits block until the next publish.
        waiter, self._published = self._published, asyncio.Event()
        waiter.set()

    def _discard(self, subscription: "Subscription[T]") -> None:
        self._subscriptions.discard(subscription)

    def _read(self, cursor: int) -> Optional[T]:
        """Event at ``cursor`` or None when the cursor is at the tail."""
        if cursor >= self._tail:
            return None
        return self._buffer[cursor - self._oldest()]

    def _oldest(self) -> int:
        return self._tail - len(self._buffer)


class Subscription(Generic[T]):
    """
    Read cursor into a BroadcastTopic.

    Usable as an async iterator (ends when the topic closes) and as a
    context manager (closes on exit).
    """

    def __init__(self, topic: BroadcastTopic[T], cursor: int):
        self._topic = topic
        self._cursor = cursor
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    def try_recv(self) -> Optional[T]:
        """
        Return the next event without waiting, or None if nothing is pending.

        Raises:
            TopicClosed: if the topic or this subscription is closed
            SubscriptionLagged: if events were evicted before being read;
                the cursor moves to the oldest retained event
        """
        if self._closed or self._topic.is_closed:
            raise TopicClosed("subscription is closed")

        oldest = self._topic._oldest()
        if self._cursor < oldest:
            missed = oldest - self._cursor
            self._cursor = oldest
            raise SubscriptionLagged(missed)

        event = self._topic._read(self._cursor)
        if event is not None:
            self._cursor += 1
        return event

    async def recv(self) -> T:
        """Wait for and return the next event. Cancelling consumes nothing."""
        while True:
            waiter = self._topic._published
            event = self.try_recv()
            if event is not None:
                return event
            await waiter.wait()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._topic._discard(self)

    def __aiter__(self) -> "Subscription[T]":
        return self

    async def __anext__(self) -> T:
        try:
            return await self.recv()
        except TopicClosed:
            raise StopAsyncIteration

    def __enter__(self) -> "Subscription[T]":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

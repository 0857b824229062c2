"""EventPublisher backed by a bounded asyncio queue.

``publish`` is synchronous and never blocks: when the queue is full the event
is dropped and logged, matching the at-most-once delivery contract.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from infrastructure.pubsub.observability import DefaultPubsubProbe, PubsubProbe


@dataclass(frozen=True)
class QueuedEvent:
    """A published event waiting for the dispatcher."""

    topic: str
    payload: Any


class QueueEventPublisher:
    """Puts events on a bounded queue for an EventDispatcher to drain."""

    def __init__(self, max_size: int = 1000, probe: PubsubProbe | None = None) -> None:
        """Initialize the publisher.

        Args:
            max_size: Undelivered events kept before new ones are dropped
            probe: Optional probe for observability
        """
        self._queue: asyncio.Queue[QueuedEvent] = asyncio.Queue(maxsize=max_size)
        self._probe = probe or DefaultPubsubProbe()

    @property
    def queue(self) -> asyncio.Queue[QueuedEvent]:
        """The queue drained by the dispatcher."""
        return self._queue

    def publish(self, topic: str, payload: Any) -> None:
        """Queue the event, or drop it if the queue is full."""
        try:
            self._queue.put_nowait(QueuedEvent(topic=topic, payload=payload))
        except asyncio.QueueFull:
            self._probe.event_dropped(topic, self._queue.maxsize)
            return
        self._probe.event_published(topic)

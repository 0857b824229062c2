"""Background worker fanning queued events out to subscribers.

Runs as a task next to the application. There is no persistence and no
retry: a subscriber that raises loses that event.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict

from infrastructure.pubsub.observability import DefaultPubsubProbe, PubsubProbe
from infrastructure.pubsub.queue_publisher import QueuedEvent, QueueEventPublisher
from shared_kernel.pubsub.ports import Subscriber


class EventDispatcher:
    """Drains a QueueEventPublisher and calls per-topic subscribers."""

    def __init__(
        self,
        publisher: QueueEventPublisher,
        probe: PubsubProbe | None = None,
    ) -> None:
        self._queue = publisher.queue
        self._probe = probe or DefaultPubsubProbe()
        self._subscribers: dict[str, list[Subscriber]] = defaultdict(list)
        self._task: asyncio.Task[None] | None = None

    def subscribe(self, topic: str, subscriber: Subscriber) -> None:
        """Register an async callback ``subscriber(topic, payload)``."""
        self._subscribers[topic].append(subscriber)

    def unsubscribe(self, topic: str, subscriber: Subscriber) -> None:
        """Remove a previously registered callback (no-op if absent)."""
        if subscriber in self._subscribers.get(topic, []):
            self._subscribers[topic].remove(subscriber)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start draining the queue in a background task."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        self._probe.dispatcher_started()

    async def stop(self) -> None:
        """Cancel the background task. Undelivered events are discarded."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self._probe.dispatcher_stopped()

    async def drain(self) -> None:
        """Deliver everything currently queued, then return."""
        while not self._queue.empty():
            event = self._queue.get_nowait()
            try:
                await self._deliver(event)
            finally:
                self._queue.task_done()

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._deliver(event)
            finally:
                self._queue.task_done()

    async def _deliver(self, event: QueuedEvent) -> None:
        subscribers = list(self._subscribers.get(event.topic, []))
        for subscriber in subscribers:
            try:
                await subscriber(event.topic, event.payload)
            except Exception as e:
                self._probe.subscriber_failed(event.topic, str(e))
        self._probe.event_delivered(event.topic, len(subscribers))

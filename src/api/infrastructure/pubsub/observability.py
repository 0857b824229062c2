"""Observability probes for in-process event delivery."""

from __future__ import annotations

from typing import Protocol

import structlog


class PubsubProbe(Protocol):
    """Protocol for publisher and dispatcher observability."""

    def event_published(self, topic: str) -> None:
        """Called when an event was queued for delivery."""
        ...

    def event_dropped(self, topic: str, queue_size: int) -> None:
        """Called when the queue was full and the event was discarded."""
        ...

    def event_delivered(self, topic: str, subscriber_count: int) -> None:
        """Called when an event was handed to every subscriber of its topic."""
        ...

    def subscriber_failed(self, topic: str, error: str) -> None:
        """Called when a subscriber raised; the event is not retried."""
        ...

    def dispatcher_started(self) -> None:
        """Called when the dispatcher starts draining the queue."""
        ...

    def dispatcher_stopped(self) -> None:
        """Called when the dispatcher stops."""
        ...


class DefaultPubsubProbe:
    """Default implementation of PubsubProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def event_published(self, topic: str) -> None:
        self._logger.debug("pubsub_event_published", topic=topic)

    def event_dropped(self, topic: str, queue_size: int) -> None:
        self._logger.warning("pubsub_event_dropped", topic=topic, queue_size=queue_size)

    def event_delivered(self, topic: str, subscriber_count: int) -> None:
        self._logger.debug(
            "pubsub_event_delivered", topic=topic, subscriber_count=subscriber_count
        )

    def subscriber_failed(self, topic: str, error: str) -> None:
        self._logger.error("pubsub_subscriber_failed", topic=topic, error=error)

    def dispatcher_started(self) -> None:
        self._logger.info("pubsub_dispatcher_started")

    def dispatcher_stopped(self) -> None:
        self._logger.info("pubsub_dispatcher_stopped")

"""Process-wide event publisher and dispatcher."""

from __future__ import annotations

from functools import lru_cache

from infrastructure.pubsub.dispatcher import EventDispatcher
from infrastructure.pubsub.queue_publisher import QueueEventPublisher
from infrastructure.settings import get_pubsub_settings


@lru_cache
def get_event_publisher() -> QueueEventPublisher:
    """Get the shared publisher, sized from PubsubSettings."""
    settings = get_pubsub_settings()
    return QueueEventPublisher(max_size=settings.queue_size)


@lru_cache
def get_event_dispatcher() -> EventDispatcher:
    """Get the dispatcher draining the shared publisher.

    Call ``await get_event_dispatcher().start()`` once the event loop runs.
    """
    return EventDispatcher(get_event_publisher())

"""Protocols (ports) for fire-and-forget event publishing."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

Subscriber = Callable[[str, Any], Awaitable[None]]


@runtime_checkable
class EventPublisher(Protocol):
    """Non-blocking publish of a payload to a topic.

    Delivery is at-most-once and best-effort: ``publish`` returns as soon as
    the event is handed off, never waits for subscribers, never retries and
    never raises because of a delivery problem. There is no ordering
    guarantee across topics.
    """

    def publish(self, topic: str, payload: Any) -> None:
        """Hand off ``payload`` for delivery to subscribers of ``topic``."""
        ...

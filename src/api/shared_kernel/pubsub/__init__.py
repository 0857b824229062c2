"""Publish contract shared by bounded contexts.

Producers depend on ``EventPublisher`` only; how events travel to
subscribers is an infrastructure concern.
"""

from shared_kernel.pubsub.ports import EventPublisher, Subscriber

__all__ = ["EventPublisher", "Subscriber"]

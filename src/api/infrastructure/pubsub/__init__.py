"""In-process event delivery: bounded queue plus a dispatching worker."""

from infrastructure.pubsub.dispatcher import EventDispatcher
from infrastructure.pubsub.observability import DefaultPubsubProbe, PubsubProbe
from infrastructure.pubsub.queue_publisher import QueueEventPublisher

__all__ = [
    "DefaultPubsubProbe",
    "EventDispatcher",
    "PubsubProbe",
    "QueueEventPublisher",
]

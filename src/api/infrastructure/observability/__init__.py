"""Probes for process-wide infrastructure such as the database engine.

Context-specific probes live beside the code they instrument, for example
``groups.infrastructure.observability``.
"""

from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)
from shared_kernel.observability_context import ObservationContext

__all__ = [
    "ConnectionProbe",
    "DefaultConnectionProbe",
    "ObservationContext",
]

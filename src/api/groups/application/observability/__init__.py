"""Domain-Oriented Observability for the Groups application layer."""

from groups.application.observability.group_service_probe import (
    DefaultGroupServiceProbe,
    GroupServiceProbe,
)

__all__ = [
    "DefaultGroupServiceProbe",
    "GroupServiceProbe",
]

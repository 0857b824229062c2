"""Observability probes for Groups infrastructure."""

from groups.infrastructure.observability.repository_probe import (
    DefaultGroupEdgeRepositoryProbe,
    DefaultGroupRepositoryProbe,
    GroupEdgeRepositoryProbe,
    GroupRepositoryProbe,
)

__all__ = [
    "DefaultGroupEdgeRepositoryProbe",
    "DefaultGroupRepositoryProbe",
    "GroupEdgeRepositoryProbe",
    "GroupRepositoryProbe",
]

"""Domain probe for the batched groups loader."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GroupsLoaderProbe(Protocol):
    """Domain probe for batched group loads."""

    def batch_loaded(self, requested: int, found: int) -> None:
        """Record that one batch query resolved ``requested`` keys."""
        ...

    def batch_failed(self, requested: int, error: str) -> None:
        """Record that a batch query raised."""
        ...

    def with_context(self, context: ObservationContext) -> GroupsLoaderProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGroupsLoaderProbe:
    """Default implementation of GroupsLoaderProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultGroupsLoaderProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupsLoaderProbe(logger=self._logger, context=context)

    def batch_loaded(self, requested: int, found: int) -> None:
        self._logger.debug(
            "groups_batch_loaded",
            requested=requested,
            found=found,
            **self._get_context_kwargs(),
        )

    def batch_failed(self, requested: int, error: str) -> None:
        self._logger.error(
            "groups_batch_failed",
            requested=requested,
            error=error,
            **self._get_context_kwargs(),
        )

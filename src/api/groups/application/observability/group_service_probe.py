"""Protocol for group application service observability.

Defines the interface for domain probes that capture application-level
domain events for group service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GroupServiceProbe(Protocol):
    """Domain probe for group application service operations."""

    def group_created(
        self,
        group_id: str,
        name: str,
        space_id: str,
        creator_id: str,
        bookmarked: bool,
    ) -> None:
        """Record that a group was created."""
        ...

    def group_creation_failed(
        self,
        space_id: str,
        step: str,
        error: str,
    ) -> None:
        """Record that group creation failed and was rolled back."""
        ...

    def creator_bookmark_skipped(self, group_id: str, space_user_id: str) -> None:
        """Record that the creator's bookmark could not be stored."""
        ...

    def group_updated(self, group_id: str, fields: list[str]) -> None:
        """Record that a group was updated."""
        ...

    def group_closed(self, group_id: str) -> None:
        """Record that a group was closed."""
        ...

    def group_bookmarked(self, group_id: str, space_user_id: str) -> None:
        """Record that a space user bookmarked a group."""
        ...

    def group_unbookmarked(self, group_id: str, space_user_id: str) -> None:
        """Record that a space user removed a bookmark."""
        ...

    def with_context(self, context: ObservationContext) -> GroupServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGroupServiceProbe:
    """Default implementation of GroupServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultGroupServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupServiceProbe(logger=self._logger, context=context)

    def group_created(
        self,
        group_id: str,
        name: str,
        space_id: str,
        creator_id: str,
        bookmarked: bool,
    ) -> None:
        """Record that a group was created."""
        self._logger.info(
            "group_created",
            group_id=group_id,
            name=name,
            space_id=space_id,
            creator_id=creator_id,
            bookmarked=bookmarked,
            **self._get_context_kwargs(),
        )

    def group_creation_failed(
        self,
        space_id: str,
        step: str,
        error: str,
    ) -> None:
        """Record that group creation failed and was rolled back."""
        self._logger.error(
            "group_creation_failed",
            space_id=space_id,
            step=step,
            error=error,
            **self._get_context_kwargs(),
        )

    def creator_bookmark_skipped(self, group_id: str, space_user_id: str) -> None:
        self._logger.warning(
            "creator_bookmark_skipped",
            group_id=group_id,
            space_user_id=space_user_id,
            **self._get_context_kwargs(),
        )

    def group_updated(self, group_id: str, fields: list[str]) -> None:
        self._logger.info(
            "group_updated",
            group_id=group_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def group_closed(self, group_id: str) -> None:
        self._logger.info(
            "group_closed",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def group_bookmarked(self, group_id: str, space_user_id: str) -> None:
        self._logger.info(
            "group_bookmarked",
            group_id=group_id,
            space_user_id=space_user_id,
            **self._get_context_kwargs(),
        )

    def group_unbookmarked(self, group_id: str, space_user_id: str) -> None:
        self._logger.info(
            "group_unbookmarked",
            group_id=group_id,
            space_user_id=space_user_id,
            **self._get_context_kwargs(),
        )

"""Domain probes for Groups repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events related to group, membership and bookmark
persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GroupRepositoryProbe(Protocol):
    """Domain probe for group repository operations."""

    def group_saved(self, group_id: str, space_id: str) -> None:
        """Record that a group was inserted or updated."""
        ...

    def group_retrieved(self, group_id: str) -> None:
        """Record that a visible group was retrieved."""
        ...

    def group_not_found(self, group_id: str) -> None:
        """Record that a group was absent or not visible to the actor."""
        ...

    def duplicate_group_name(self, name: str, space_id: str) -> None:
        """Record that a group name was already taken in the space."""
        ...

    def with_context(self, context: ObservationContext) -> GroupRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class GroupEdgeRepositoryProbe(Protocol):
    """Domain probe for membership and bookmark repository operations."""

    def membership_created(self, group_id: str, space_user_id: str) -> None:
        """Record that a membership row was inserted."""
        ...

    def membership_conflict(self, group_id: str, space_user_id: str) -> None:
        """Record that a membership already existed."""
        ...

    def bookmark_created(self, group_id: str, space_user_id: str) -> None:
        """Record that a bookmark row was inserted."""
        ...

    def bookmark_already_exists(self, group_id: str, space_user_id: str) -> None:
        """Record that a concurrent or repeated bookmark hit the unique index."""
        ...

    def bookmark_removed(self, group_id: str, space_user_id: str) -> None:
        """Record that a bookmark row was deleted."""
        ...

    def unexpected_storage_error(self, operation: str, error: str) -> None:
        """Record a storage failure that could not be classified."""
        ...

    def with_context(self, context: ObservationContext) -> GroupEdgeRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class _StructlogProbe:
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


class DefaultGroupRepositoryProbe(_StructlogProbe):
    """Default implementation of GroupRepositoryProbe using structlog."""

    def with_context(self, context: ObservationContext) -> DefaultGroupRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupRepositoryProbe(logger=self._logger, context=context)

    def group_saved(self, group_id: str, space_id: str) -> None:
        self._logger.info(
            "group_saved",
            group_id=group_id,
            space_id=space_id,
            **self._get_context_kwargs(),
        )

    def group_retrieved(self, group_id: str) -> None:
        self._logger.debug(
            "group_retrieved",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def group_not_found(self, group_id: str) -> None:
        self._logger.debug(
            "group_not_found",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def duplicate_group_name(self, name: str, space_id: str) -> None:
        self._logger.warning(
            "duplicate_group_name",
            name=name,
            space_id=space_id,
            **self._get_context_kwargs(),
        )


class DefaultGroupEdgeRepositoryProbe(_StructlogProbe):
    """Default implementation of GroupEdgeRepositoryProbe using structlog."""

    def with_context(
        self, context: ObservationContext
    ) -> DefaultGroupEdgeRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupEdgeRepositoryProbe(logger=self._logger, context=context)

    def membership_created(self, group_id: str, space_user_id: str) -> None:
        self._logger.info(
            "group_membership_created",
            group_id=group_id,
            space_user_id=space_user_id,
            **self._get_context_kwargs(),
        )

    def membership_conflict(self, group_id: str, space_user_id: str) -> None:
        self._logger.warning(
            "group_membership_conflict",
            group_id=group_id,
            space_user_id=space_user_id,
            **self._get_context_kwargs(),
        )

    def bookmark_created(self, group_id: str, space_user_id: str) -> None:
        self._logger.info(
            "group_bookmark_created",
            group_id=group_id,
            space_user_id=space_user_id,
            **self._get_context_kwargs(),
        )

    def bookmark_already_exists(self, group_id: str, space_user_id: str) -> None:
        self._logger.debug(
            "group_bookmark_already_exists",
            group_id=group_id,
            space_user_id=space_user_id,
            **self._get_context_kwargs(),
        )

    def bookmark_removed(self, group_id: str, space_user_id: str) -> None:
        self._logger.info(
            "group_bookmark_removed",
            group_id=group_id,
            space_user_id=space_user_id,
            **self._get_context_kwargs(),
        )

    def unexpected_storage_error(self, operation: str, error: str) -> None:
        self._logger.error(
            "unexpected_storage_error",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )

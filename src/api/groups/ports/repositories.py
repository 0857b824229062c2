"""Repository protocols (ports) for the Groups bounded context.

Implementations share the caller's session and never commit; the
application service owns the transaction boundary.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from groups.domain.actors import Actor, SpaceUser
from groups.domain.aggregates import Group, GroupBookmark, GroupMembership
from groups.domain.value_objects import GroupId


@runtime_checkable
class IGroupRepository(Protocol):
    """Persistence for Group aggregates, reads filtered by visibility."""

    async def get(self, actor: Actor, group_id: GroupId) -> Group:
        """Fetch a group the actor is allowed to see.

        Raises:
            GroupNotFoundError: If the group is absent or not visible
        """
        ...

    async def list_visible(self, actor: Actor) -> list[Group]:
        """List every group visible to the actor, ordered by name."""
        ...

    async def add(self, group: Group) -> Group:
        """Insert a new group and return it with timestamps populated.

        Raises:
            GroupValidationError: If the name is taken in the space
        """
        ...

    async def update(self, group: Group, **changes: Any) -> Group:
        """Apply a partial update and persist it.

        Raises:
            GroupValidationError: If an attribute is invalid or the new
                name is taken in the space
        """
        ...

    async def close(self, group: Group) -> Group:
        """Persist the CLOSED state."""
        ...


@runtime_checkable
class IGroupMembershipRepository(Protocol):
    """Persistence for space user to group memberships."""

    async def get(self, group: Group, space_user: SpaceUser) -> GroupMembership:
        """Fetch a membership.

        Raises:
            NotAGroupMemberError: If the space user is not a member
        """
        ...

    async def create(self, group: Group, space_user: SpaceUser) -> GroupMembership:
        """Insert a membership.

        Raises:
            GroupValidationError: If the space user is already a member
        """
        ...

    async def list_for_group(self, group: Group) -> list[GroupMembership]:
        """List the memberships of a group, oldest first."""
        ...


@runtime_checkable
class IGroupBookmarkRepository(Protocol):
    """Persistence for space user to group bookmarks."""

    async def add(self, group: Group, space_user: SpaceUser) -> bool:
        """Insert a bookmark inside a savepoint.

        Returns:
            True if a row was inserted, False if it already existed

        Raises:
            UnexpectedStorageError: For any other storage failure
        """
        ...

    async def remove(self, group: Group, space_user: SpaceUser) -> bool:
        """Delete the bookmark if present.

        Returns:
            True if a row was deleted
        """
        ...

    async def exists(self, group: Group, space_user: SpaceUser) -> bool:
        """Whether the space user has bookmarked the group."""
        ...

    async def list_bookmarked(self, space_user: SpaceUser) -> list[Group]:
        """Visible groups the space user has bookmarked, ordered by name."""
        ...

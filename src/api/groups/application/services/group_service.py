"""Group application service for the Groups bounded context.

Orchestrates group creation as one all-or-nothing workflow, the group
lifecycle and bookmark toggling. Every public method owns exactly one
transaction; events are published only after that transaction commits.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from groups.application.observability import DefaultGroupServiceProbe, GroupServiceProbe
from groups.application.value_objects import GroupCreation
from groups.domain.actors import Actor, SpaceUser
from groups.domain.aggregates import Group, GroupMembership
from groups.domain.events import DomainEvent, GroupBookmarked, GroupUnbookmarked
from groups.domain.value_objects import GroupId
from groups.ports.exceptions import TransactionStepError, UnexpectedStorageError
from groups.ports.repositories import (
    IGroupBookmarkRepository,
    IGroupMembershipRepository,
    IGroupRepository,
)
from infrastructure.database.pipeline import TransactionPipeline
from shared_kernel.pubsub import EventPublisher


class GroupService:
    """Application service for group management.

    Reads are filtered by the actor's visibility, so a group the actor may
    not see behaves exactly like a group that does not exist.
    """

    def __init__(
        self,
        session: AsyncSession,
        group_repository: IGroupRepository,
        membership_repository: IGroupMembershipRepository,
        bookmark_repository: IGroupBookmarkRepository,
        publisher: EventPublisher,
        probe: GroupServiceProbe | None = None,
    ):
        """Initialize GroupService with dependencies.

        Args:
            session: Database session for transaction management
            group_repository: Repository for group persistence
            membership_repository: Repository for group memberships
            bookmark_repository: Repository for group bookmarks
            publisher: Fire-and-forget publisher for bookmark events
            probe: Optional domain probe for observability
        """
        self._session = session
        self._group_repository = group_repository
        self._membership_repository = membership_repository
        self._bookmark_repository = bookmark_repository
        self._publisher = publisher
        self._probe = probe or DefaultGroupServiceProbe()

    async def create_group(
        self,
        space_user: SpaceUser,
        attributes: Mapping[str, Any],
    ) -> GroupCreation:
        """Create a group, make the creator a member and bookmark it.

        The group and the membership are inserted in one transaction. The
        bookmark is best-effort: if it cannot be stored the group is still
        created and ``bookmarked`` is False.

        Args:
            space_user: The creator; supplies the space and creator id
            attributes: ``name`` (required), ``description``, ``is_private``

        Returns:
            GroupCreation with the committed group and membership

        Raises:
            TransactionStepError: If the ``group`` or ``group_user`` step
                failed; nothing was committed. ``cause`` carries the
                GroupValidationError for invalid or duplicate names.
        """

        async def insert_group(done: Mapping[str, Any]) -> Group:
            group = Group.create(
                space_user,
                name=attributes.get("name"),
                description=attributes.get("description"),
                is_private=attributes.get("is_private", False),
            )
            return await self._group_repository.add(group)

        async def insert_group_user(done: Mapping[str, Any]) -> GroupMembership:
            return await self._membership_repository.create(done["group"], space_user)

        async def bookmark_group(done: Mapping[str, Any]) -> bool:
            try:
                return await self._bookmark_repository.add(done["group"], space_user)
            except UnexpectedStorageError:
                self._probe.creator_bookmark_skipped(
                    done["group"].id.value, space_user.id.value
                )
                return False

        pipeline = (
            TransactionPipeline(self._session)
            .step("group", insert_group)
            .step("group_user", insert_group_user)
            .step("bookmarked", bookmark_group)
        )

        try:
            results = await pipeline.run()
        except TransactionStepError as e:
            self._probe.group_creation_failed(
                space_id=space_user.space_id.value,
                step=e.step,
                error=str(e.cause),
            )
            raise

        creation = GroupCreation(
            group=results["group"],
            group_user=results["group_user"],
            bookmarked=results["bookmarked"],
        )
        self._probe.group_created(
            group_id=creation.group.id.value,
            name=creation.group.name,
            space_id=creation.group.space_id.value,
            creator_id=space_user.id.value,
            bookmarked=creation.bookmarked,
        )
        if creation.bookmarked:
            self._publish(GroupBookmarked.now(creation.group, space_user.id))
        return creation

    async def get_group(self, actor: Actor, group_id: GroupId) -> Group:
        """Get a group visible to the actor.

        Raises:
            GroupNotFoundError: If the group is absent or not visible
        """
        async with self._session.begin():
            return await self._group_repository.get(actor, group_id)

    async def list_groups(self, actor: Actor) -> list[Group]:
        """List the groups visible to the actor, ordered by name."""
        async with self._session.begin():
            return await self._group_repository.list_visible(actor)

    async def update_group(
        self,
        actor: Actor,
        group_id: GroupId,
        attributes: Mapping[str, Any],
    ) -> Group:
        """Apply a partial update of name, description and/or is_private.

        Raises:
            GroupNotFoundError: If the group is absent or not visible
            GroupValidationError: If an attribute is invalid or the new name
                is taken in the space
        """
        async with self._session.begin():
            group = await self._group_repository.get(actor, group_id)
            updated = await self._group_repository.update(group, **attributes)

        self._probe.group_updated(updated.id.value, sorted(attributes))
        return updated

    async def close_group(self, actor: Actor, group_id: GroupId) -> Group:
        """Close a group. Closed groups stay visible and readable.

        Raises:
            GroupNotFoundError: If the group is absent or not visible
        """
        async with self._session.begin():
            group = await self._group_repository.get(actor, group_id)
            closed = await self._group_repository.close(group)

        self._probe.group_closed(closed.id.value)
        return closed

    async def get_group_membership(
        self,
        space_user: SpaceUser,
        group_id: GroupId,
    ) -> GroupMembership:
        """Get the space user's membership in a visible group.

        Raises:
            GroupNotFoundError: If the group is absent or not visible
            NotAGroupMemberError: If the space user is not a member
        """
        async with self._session.begin():
            group = await self._group_repository.get(space_user, group_id)
            return await self._membership_repository.get(group, space_user)

    async def list_group_memberships(
        self,
        actor: Actor,
        group_id: GroupId,
    ) -> list[GroupMembership]:
        """List the memberships of a visible group, oldest first.

        Raises:
            GroupNotFoundError: If the group is absent or not visible
        """
        async with self._session.begin():
            group = await self._group_repository.get(actor, group_id)
            return await self._membership_repository.list_for_group(group)

    async def bookmark_group(self, space_user: SpaceUser, group_id: GroupId) -> bool:
        """Bookmark a visible group. Bookmarking twice is not an error.

        Returns:
            True if a bookmark was created (and ``group_bookmarked`` was
            published), False if the group was already bookmarked

        Raises:
            GroupNotFoundError: If the group is absent or not visible
            UnexpectedStorageError: If the bookmark could not be stored
        """
        async with self._session.begin():
            group = await self._group_repository.get(space_user, group_id)
            inserted = await self._bookmark_repository.add(group, space_user)

        if inserted:
            self._probe.group_bookmarked(group.id.value, space_user.id.value)
            self._publish(GroupBookmarked.now(group, space_user.id))
        return inserted

    async def unbookmark_group(self, space_user: SpaceUser, group_id: GroupId) -> bool:
        """Remove the space user's bookmark, if any.

        Returns:
            True if a bookmark was deleted (and ``group_unbookmarked`` was
            published), False if there was nothing to delete

        Raises:
            GroupNotFoundError: If the group is absent or not visible
        """
        async with self._session.begin():
            group = await self._group_repository.get(space_user, group_id)
            removed = await self._bookmark_repository.remove(group, space_user)

        if removed:
            self._probe.group_unbookmarked(group.id.value, space_user.id.value)
            self._publish(GroupUnbookmarked.now(group, space_user.id))
        return removed

    async def list_bookmarked_groups(self, space_user: SpaceUser) -> list[Group]:
        """Visible groups bookmarked by the space user, ordered by name."""
        async with self._session.begin():
            return await self._bookmark_repository.list_bookmarked(space_user)

    async def is_bookmarked(self, space_user: SpaceUser, group_id: GroupId) -> bool:
        """Whether the space user has bookmarked a visible group.

        Raises:
            GroupNotFoundError: If the group is absent or not visible
        """
        async with self._session.begin():
            group = await self._group_repository.get(space_user, group_id)
            return await self._bookmark_repository.exists(group, space_user)

    def _publish(self, event: DomainEvent) -> None:
        self._publisher.publish(event.topic, event)

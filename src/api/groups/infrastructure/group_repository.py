"""SQLAlchemy implementation of IGroupRepository.

Reads go through the visibility query so that "not found" and "not allowed"
are the same outcome. Writes flush immediately so constraint violations
surface inside the caller's transaction, where they are classified.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from groups.domain.actors import Actor
from groups.domain.aggregates import Group
from groups.domain.value_objects import GroupId
from groups.infrastructure.mappers import group_from_model
from groups.infrastructure.models import GROUP_NAME_UNIQUE, GroupModel
from groups.infrastructure.observability import (
    DefaultGroupRepositoryProbe,
    GroupRepositoryProbe,
)
from groups.infrastructure.visibility import visible_groups_query
from groups.ports.exceptions import GroupNotFoundError, GroupValidationError
from groups.ports.repositories import IGroupRepository
from infrastructure.database.constraints import violated_constraint


class GroupRepository(IGroupRepository):
    """Group persistence on a shared AsyncSession.

    The repository never begins or commits transactions; the application
    service owns the boundary.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: GroupRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession shared with the calling service
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultGroupRepositoryProbe()

    async def get(self, actor: Actor, group_id: GroupId) -> Group:
        """Fetch a group through the actor's visibility predicate.

        Raises:
            GroupNotFoundError: If the group is absent, in another space, or
                private without a membership for the actor
        """
        stmt = visible_groups_query(actor).where(GroupModel.id == group_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.group_not_found(group_id.value)
            raise GroupNotFoundError()

        self._probe.group_retrieved(model.id)
        return group_from_model(model)

    async def list_visible(self, actor: Actor) -> list[Group]:
        """List every group visible to the actor, ordered by name."""
        stmt = visible_groups_query(actor).order_by(GroupModel.name, GroupModel.id)
        result = await self._session.execute(stmt)
        return [group_from_model(model) for model in result.scalars().all()]

    async def add(self, group: Group) -> Group:
        """Insert a pending group.

        Raises:
            GroupValidationError: If the name is already taken in the space
            IntegrityError: For any other constraint violation
        """
        model = GroupModel(
            id=group.id.value,
            space_id=group.space_id.value,
            creator_id=group.creator_id.value,
            name=group.name,
            description=group.description,
            is_private=group.is_private,
            state=group.state.value,
        )
        self._session.add(model)
        await self._flush_group(group)

        self._probe.group_saved(group.id.value, group.space_id.value)
        return group_from_model(model)

    async def update(self, group: Group, **changes: Any) -> Group:
        """Validate and persist a partial update.

        The given aggregate is left untouched; the updated copy is returned.

        Raises:
            GroupValidationError: If an attribute is invalid or the new name
                is taken in the space
            GroupNotFoundError: If the group row no longer exists
        """
        updated = replace(group)
        updated.update(**changes)

        model = await self._load_model(group.id)
        model.name = updated.name
        model.description = updated.description
        model.is_private = updated.is_private
        await self._flush_group(updated)

        self._probe.group_saved(group.id.value, group.space_id.value)
        return group_from_model(model)

    async def close(self, group: Group) -> Group:
        """Persist the CLOSED state, whatever the current state is.

        The given aggregate is left untouched; the closed copy is returned.

        Raises:
            GroupNotFoundError: If the group row no longer exists
        """
        closed = replace(group)
        closed.close()

        model = await self._load_model(group.id)
        model.state = closed.state.value
        await self._session.flush()

        self._probe.group_saved(group.id.value, group.space_id.value)
        return group_from_model(model)

    async def _load_model(self, group_id: GroupId) -> GroupModel:
        model = await self._session.get(GroupModel, group_id.value)
        if model is None:
            self._probe.group_not_found(group_id.value)
            raise GroupNotFoundError()
        return model

    async def _flush_group(self, group: Group) -> None:
        try:
            await self._session.flush()
        except IntegrityError as e:
            if violated_constraint(e).is_unique(GROUP_NAME_UNIQUE):
                self._probe.duplicate_group_name(group.name, group.space_id.value)
                raise GroupValidationError({"name": ["has already been taken"]}) from e
            raise

"""SQLAlchemy implementation of IGroupMembershipRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from groups.domain.actors import SpaceUser
from groups.domain.aggregates import Group, GroupMembership
from groups.infrastructure.mappers import membership_from_model
from groups.infrastructure.models import GROUP_USER_UNIQUE, GroupUserModel
from groups.infrastructure.observability import (
    DefaultGroupEdgeRepositoryProbe,
    GroupEdgeRepositoryProbe,
)
from groups.ports.exceptions import GroupValidationError, NotAGroupMemberError
from groups.ports.repositories import IGroupMembershipRepository
from infrastructure.database.constraints import violated_constraint


class GroupMembershipRepository(IGroupMembershipRepository):
    """Membership rows for (group, space user) pairs."""

    def __init__(
        self,
        session: AsyncSession,
        probe: GroupEdgeRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultGroupEdgeRepositoryProbe()

    async def get(self, group: Group, space_user: SpaceUser) -> GroupMembership:
        """Fetch the membership of a space user in a group.

        Raises:
            NotAGroupMemberError: If there is no such membership
        """
        stmt = select(GroupUserModel).where(
            GroupUserModel.group_id == group.id.value,
            GroupUserModel.space_user_id == space_user.id.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            raise NotAGroupMemberError()
        return membership_from_model(model)

    async def create(self, group: Group, space_user: SpaceUser) -> GroupMembership:
        """Insert a membership.

        Raises:
            GroupValidationError: If the space user is already a member
            IntegrityError: For any other constraint violation
        """
        model = GroupUserModel(
            id=str(ULID()),
            space_id=group.space_id.value,
            group_id=group.id.value,
            space_user_id=space_user.id.value,
        )
        self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            if violated_constraint(e).is_unique(GROUP_USER_UNIQUE):
                self._probe.membership_conflict(group.id.value, space_user.id.value)
                raise GroupValidationError(
                    {"space_user_id": ["is already a member"]}
                ) from e
            raise

        self._probe.membership_created(group.id.value, space_user.id.value)
        return membership_from_model(model)

    async def list_for_group(self, group: Group) -> list[GroupMembership]:
        stmt = (
            select(GroupUserModel)
            .where(GroupUserModel.group_id == group.id.value)
            .order_by(GroupUserModel.inserted_at, GroupUserModel.id)
        )
        result = await self._session.execute(stmt)
        return [membership_from_model(model) for model in result.scalars().all()]

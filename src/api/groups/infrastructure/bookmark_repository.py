"""SQLAlchemy implementation of IGroupBookmarkRepository.

Bookmark inserts run inside a SAVEPOINT. A unique violation there means
another request (or an earlier one) already bookmarked the group; rolling
back to the savepoint keeps the enclosing transaction usable, so the
caller can treat the outcome as "already bookmarked" and carry on.
"""

from __future__ import annotations

from sqlalchemy import and_, delete, exists, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from groups.domain.actors import SpaceUser
from groups.domain.aggregates import Group
from groups.infrastructure.mappers import group_from_model
from groups.infrastructure.models import (
    GROUP_BOOKMARK_UNIQUE,
    GroupBookmarkModel,
    GroupModel,
)
from groups.infrastructure.observability import (
    DefaultGroupEdgeRepositoryProbe,
    GroupEdgeRepositoryProbe,
)
from groups.infrastructure.visibility import visible_groups_query
from groups.ports.exceptions import UnexpectedStorageError
from groups.ports.repositories import IGroupBookmarkRepository
from infrastructure.database.constraints import violated_constraint


class GroupBookmarkRepository(IGroupBookmarkRepository):
    """Bookmark rows for (group, space user) pairs."""

    def __init__(
        self,
        session: AsyncSession,
        probe: GroupEdgeRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultGroupEdgeRepositoryProbe()

    async def add(self, group: Group, space_user: SpaceUser) -> bool:
        """Insert a bookmark, tolerating one that already exists.

        Returns:
            True if a row was inserted, False if the pair was already
            bookmarked

        Raises:
            UnexpectedStorageError: For any failure other than the
                bookmark uniqueness violation
        """
        group_id, space_user_id = group.id.value, space_user.id.value
        model = GroupBookmarkModel(
            id=str(ULID()),
            space_id=group.space_id.value,
            group_id=group_id,
            space_user_id=space_user_id,
        )

        try:
            async with self._session.begin_nested():
                self._session.add(model)
        except IntegrityError as e:
            if violated_constraint(e).is_unique(GROUP_BOOKMARK_UNIQUE):
                self._probe.bookmark_already_exists(group_id, space_user_id)
                return False
            self._probe.unexpected_storage_error("bookmark_group", str(e.orig))
            raise UnexpectedStorageError() from e
        except SQLAlchemyError as e:
            self._probe.unexpected_storage_error("bookmark_group", str(e))
            raise UnexpectedStorageError() from e

        self._probe.bookmark_created(group_id, space_user_id)
        return True

    async def remove(self, group: Group, space_user: SpaceUser) -> bool:
        stmt = delete(GroupBookmarkModel).where(
            GroupBookmarkModel.group_id == group.id.value,
            GroupBookmarkModel.space_user_id == space_user.id.value,
        )
        result = await self._session.execute(stmt)

        removed = result.rowcount > 0
        if removed:
            self._probe.bookmark_removed(group.id.value, space_user.id.value)
        return removed

    async def exists(self, group: Group, space_user: SpaceUser) -> bool:
        stmt = select(
            exists().where(
                GroupBookmarkModel.group_id == group.id.value,
                GroupBookmarkModel.space_user_id == space_user.id.value,
            )
        )
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def list_bookmarked(self, space_user: SpaceUser) -> list[Group]:
        """Bookmarked groups, filtered by visibility.

        A bookmark on a private group the space user has since left is kept
        but not returned.
        """
        stmt = (
            visible_groups_query(space_user)
            .join(
                GroupBookmarkModel,
                and_(
                    GroupBookmarkModel.group_id == GroupModel.id,
                    GroupBookmarkModel.space_user_id == space_user.id.value,
                ),
            )
            .order_by(GroupModel.name, GroupModel.id)
        )
        result = await self._session.execute(stmt)
        return [group_from_model(model) for model in result.scalars().all()]

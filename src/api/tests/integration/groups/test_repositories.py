"""Integration tests for Groups repositories and visibility queries."""

import pytest
from sqlalchemy import delete, func, select

from groups.domain.actors import User
from groups.domain.aggregates import Group
from groups.infrastructure.bookmark_repository import GroupBookmarkRepository
from groups.infrastructure.group_repository import GroupRepository
from groups.infrastructure.membership_repository import GroupMembershipRepository
from groups.infrastructure.models import (
    GroupBookmarkModel,
    GroupUserModel,
    SpaceUserModel,
)
from groups.infrastructure.visibility import visible_groups_query
from groups.ports.exceptions import GroupNotFoundError, GroupValidationError

pytestmark = pytest.mark.integration


@pytest.fixture
def groups_repo(session):
    return GroupRepository(session)


@pytest.fixture
def memberships(session):
    return GroupMembershipRepository(session)


@pytest.fixture
def bookmarks(session):
    return GroupBookmarkRepository(session)


async def add_group(session, groups_repo, creator, name, is_private=False) -> Group:
    async with session.begin():
        return await groups_repo.add(
            Group.create(creator, name=name, is_private=is_private)
        )


class TestMembershipRepository:
    @pytest.mark.asyncio
    async def test_second_membership_is_validation_error(
        self, session, groups_repo, memberships, space_user
    ):
        group = await add_group(session, groups_repo, space_user, "engineering")
        async with session.begin():
            await memberships.create(group, space_user)

        with pytest.raises(GroupValidationError) as exc_info:
            async with session.begin():
                await memberships.create(group, space_user)

        assert exc_info.value.errors == {"space_user_id": ["is already a member"]}


class TestBookmarkRepository:
    @pytest.mark.asyncio
    async def test_duplicate_bookmark_keeps_outer_transaction_usable(
        self, session, groups_repo, bookmarks, memberships, space_user
    ):
        """The savepoint absorbs the violation; later writes still commit."""
        group = await add_group(session, groups_repo, space_user, "engineering")

        async with session.begin():
            assert await bookmarks.add(group, space_user) is True
            assert await bookmarks.add(group, space_user) is False
            await memberships.create(group, space_user)

        async with session.begin():
            assert await bookmarks.exists(group, space_user) is True
            assert len(await memberships.list_for_group(group)) == 1

    @pytest.mark.asyncio
    async def test_bookmark_from_another_session_counts_as_existing(
        self, session_factory, session, groups_repo, space_user
    ):
        """A bookmark committed elsewhere first makes ours a no-op."""
        group = await add_group(session, groups_repo, space_user, "engineering")

        async with session_factory() as other, other.begin():
            assert await GroupBookmarkRepository(other).add(group, space_user) is True

        async with session_factory() as late, late.begin():
            assert await GroupBookmarkRepository(late).add(group, space_user) is False

        async with session.begin():
            total = await session.scalar(
                select(func.count()).select_from(GroupBookmarkModel)
            )
        assert total == 1

    @pytest.mark.asyncio
    async def test_list_bookmarked_hides_private_group_after_leaving(
        self, session, groups_repo, memberships, bookmarks, space_user
    ):
        group = await add_group(
            session, groups_repo, space_user, "leads", is_private=True
        )
        async with session.begin():
            await memberships.create(group, space_user)
            await bookmarks.add(group, space_user)

        async with session.begin():
            await session.execute(delete(GroupUserModel))

        async with session.begin():
            assert await bookmarks.list_bookmarked(space_user) == []
            assert await bookmarks.exists(group, space_user) is True


class TestVisibilityQueries:
    @pytest.mark.asyncio
    async def test_user_with_memberships_in_two_spaces_gets_no_duplicates(
        self, session, groups_repo, memberships, make_space_user, space_user
    ):
        second = await make_space_user(user_id=space_user.user_id)
        first_group = await add_group(
            session, groups_repo, space_user, "leads", is_private=True
        )
        second_group = await add_group(
            session, groups_repo, second, "leads", is_private=True
        )
        async with session.begin():
            await memberships.create(first_group, space_user)
            await memberships.create(second_group, second)

        async with session.begin():
            result = await session.execute(
                visible_groups_query(User(id=space_user.user_id))
            )
            ids = [g.id for g in result.scalars().all()]

        assert sorted(ids) == sorted([first_group.id.value, second_group.id.value])

    @pytest.mark.asyncio
    async def test_removed_space_user_loses_private_access(
        self, session, groups_repo, memberships, make_space_user, space_user
    ):
        """Deleting the space user cascades its memberships away."""
        leaver = await make_space_user(space_id=space_user.space_id)
        group = await add_group(
            session, groups_repo, space_user, "leads", is_private=True
        )
        async with session.begin():
            await memberships.create(group, leaver)

        async with session.begin():
            await session.execute(
                delete(SpaceUserModel).where(SpaceUserModel.id == leaver.id.value)
            )

        with pytest.raises(GroupNotFoundError):
            async with session.begin():
                await groups_repo.get(User(id=leaver.user_id), group.id)

        async with session.begin():
            remaining = await session.scalar(
                select(func.count()).select_from(GroupUserModel)
            )
        assert remaining == 0

    @pytest.mark.asyncio
    async def test_membership_of_another_user_grants_nothing(
        self, session, groups_repo, memberships, space_user, teammate
    ):
        group = await add_group(
            session, groups_repo, space_user, "leads", is_private=True
        )
        async with session.begin():
            await memberships.create(group, space_user)

        with pytest.raises(GroupNotFoundError):
            async with session.begin():
                await groups_repo.get(User(id=teammate.user_id), group.id)

"""Unit tests for GroupsLoaderSource batching and caching."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from groups.domain.aggregates import Group, GroupMembership
from groups.infrastructure.models import GroupModel
from groups.ports.exceptions import LoaderConfigurationError
from groups.presentation.loaders import GroupsLoaderSource


def _model(group: Group) -> GroupModel:
    return GroupModel(
        id=group.id.value,
        space_id=group.space_id.value,
        creator_id=group.creator_id.value,
        name=group.name,
        is_private=group.is_private,
        state=group.state.value,
    )


@pytest.fixture
def groups(space_user):
    return [Group.create(space_user, name=f"group-{i}") for i in range(3)]


@pytest.fixture
def session():
    """Session returning the configured models for any SELECT."""
    session = AsyncMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=None)
    return session


@pytest.fixture
def session_factory(session):
    return MagicMock(return_value=session)


def _returns(session, models):
    result = MagicMock()
    result.scalars.return_value.all.return_value = models
    session.execute.return_value = result


class TestFromParams:
    def test_requires_current_user(self, session_factory):
        with pytest.raises(LoaderConfigurationError, match="authentication required"):
            GroupsLoaderSource.from_params(session_factory, {})

    def test_rejects_non_actor_current_user(self, session_factory):
        with pytest.raises(LoaderConfigurationError):
            GroupsLoaderSource.from_params(session_factory, {"current_user": "bob"})

    def test_binds_space_user(self, session_factory, space_user):
        source = GroupsLoaderSource.from_params(
            session_factory, {"current_user": space_user}
        )

        assert source.actor is space_user

    def test_binds_global_user(self, session_factory, user):
        source = GroupsLoaderSource.from_params(session_factory, {"current_user": user})

        assert source.actor is user


class TestQuery:
    def test_group_query_is_visibility_query(self, session_factory, space_user):
        source = GroupsLoaderSource(session_factory, space_user)

        sql = str(source.query(Group))

        assert "group_users" in sql
        assert "groups.space_id" in sql

    def test_other_entities_are_rejected(self, session_factory, space_user):
        source = GroupsLoaderSource(session_factory, space_user)

        with pytest.raises(
            LoaderConfigurationError, match="query not valid for this context"
        ):
            source.query(GroupMembership)


class TestLoad:
    @pytest.mark.asyncio
    async def test_same_tick_loads_share_one_query(
        self, session_factory, session, space_user, groups
    ):
        _returns(session, [_model(g) for g in groups])
        source = GroupsLoaderSource(session_factory, space_user)

        loaded = await asyncio.gather(*(source.load(Group, g.id) for g in groups))

        assert [g.id for g in loaded] == [g.id for g in groups]
        session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_or_invisible_keys_load_as_none(
        self, session_factory, session, space_user, groups
    ):
        _returns(session, [_model(groups[0])])
        source = GroupsLoaderSource(session_factory, space_user)

        loaded = await source.load_many(Group, [groups[0].id, groups[1].id])

        assert loaded[0].id == groups[0].id
        assert loaded[1] is None

    @pytest.mark.asyncio
    async def test_results_are_cached_per_instance(
        self, session_factory, session, space_user, groups
    ):
        _returns(session, [_model(groups[0])])
        source = GroupsLoaderSource(session_factory, space_user)

        first = await source.load(Group, groups[0].id)
        second = await source.load(Group, groups[0].id.value)

        assert first == second
        session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_batch_is_not_cached(
        self, session_factory, session, space_user, groups
    ):
        source = GroupsLoaderSource(session_factory, space_user)
        session.execute.side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError):
            await source.load(Group, groups[0].id)

        session.execute.side_effect = None
        _returns(session, [_model(groups[0])])
        loaded = await source.load(Group, groups[0].id)

        assert loaded.id == groups[0].id

    @pytest.mark.asyncio
    async def test_load_rejects_other_entities(self, session_factory, space_user):
        source = GroupsLoaderSource(session_factory, space_user)

        with pytest.raises(LoaderConfigurationError):
            await source.load(GroupMembership, "01HZZZZZZZZZZZZZZZZZZZZZZZ")

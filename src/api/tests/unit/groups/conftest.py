"""Fixtures shared by Groups unit tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from groups.domain.actors import SpaceUser, User
from groups.domain.aggregates import Group
from groups.domain.value_objects import SpaceId, SpaceUserId, UserId


@pytest.fixture
def mock_session():
    """Create mock async session with transaction support."""
    session = AsyncMock()
    mock_transaction = MagicMock()
    mock_transaction.__aenter__ = AsyncMock(return_value=None)
    mock_transaction.__aexit__ = AsyncMock(return_value=None)
    session.begin = MagicMock(return_value=mock_transaction)
    session.begin_nested = MagicMock(return_value=mock_transaction)
    session.add = MagicMock()
    return session


@pytest.fixture
def space_id() -> SpaceId:
    return SpaceId.generate()


@pytest.fixture
def space_user(space_id: SpaceId) -> SpaceUser:
    return SpaceUser(
        id=SpaceUserId.generate(),
        space_id=space_id,
        user_id=UserId.generate(),
    )


@pytest.fixture
def user(space_user: SpaceUser) -> User:
    return User(id=space_user.user_id)


@pytest.fixture
def group(space_user: SpaceUser) -> Group:
    return Group.create(space_user, name="engineering")

"""SQLAlchemy ORM models for the Groups bounded context."""

from groups.infrastructure.models.group import (
    GROUP_BOOKMARK_UNIQUE,
    GROUP_NAME_UNIQUE,
    GROUP_USER_UNIQUE,
    GroupBookmarkModel,
    GroupModel,
    GroupUserModel,
)
from groups.infrastructure.models.space import SpaceModel, SpaceUserModel, UserModel

__all__ = [
    "GROUP_BOOKMARK_UNIQUE",
    "GROUP_NAME_UNIQUE",
    "GROUP_USER_UNIQUE",
    "GroupBookmarkModel",
    "GroupModel",
    "GroupUserModel",
    "SpaceModel",
    "SpaceUserModel",
    "UserModel",
]

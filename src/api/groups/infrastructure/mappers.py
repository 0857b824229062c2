"""Conversions between ORM rows and domain objects."""

from __future__ import annotations

from groups.domain.aggregates import Group, GroupBookmark, GroupMembership
from groups.domain.value_objects import (
    GroupId,
    GroupState,
    SpaceId,
    SpaceUserId,
)
from groups.infrastructure.models import GroupBookmarkModel, GroupModel, GroupUserModel


def group_from_model(model: GroupModel) -> Group:
    return Group(
        id=GroupId(value=model.id),
        space_id=SpaceId(value=model.space_id),
        creator_id=SpaceUserId(value=model.creator_id),
        name=model.name,
        description=model.description,
        is_private=model.is_private,
        state=GroupState(model.state),
        inserted_at=model.inserted_at,
        updated_at=model.updated_at,
    )


def membership_from_model(model: GroupUserModel) -> GroupMembership:
    return GroupMembership(
        id=model.id,
        space_id=SpaceId(value=model.space_id),
        group_id=GroupId(value=model.group_id),
        space_user_id=SpaceUserId(value=model.space_user_id),
        inserted_at=model.inserted_at,
    )


def bookmark_from_model(model: GroupBookmarkModel) -> GroupBookmark:
    return GroupBookmark(
        id=model.id,
        space_id=SpaceId(value=model.space_id),
        group_id=GroupId(value=model.group_id),
        space_user_id=SpaceUserId(value=model.space_user_id),
        inserted_at=model.inserted_at,
    )

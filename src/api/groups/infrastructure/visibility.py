"""Visibility predicates: which groups may an actor read.

A group is visible when it is public, or when it is private and the actor
holds a membership in it. The rule is expressed in the query itself so
that invisible private groups never leave the database.

There are two actor shapes and therefore two variants:

- ``SpaceUserVisibility`` scopes to the member's own space and left joins
  the member's membership row.
- ``UserVisibility`` has no space to scope to. It left joins a membership
  subquery resolved through ``space_users`` to the user. A private group
  counts only if both the membership and the space user row are present;
  an orphaned membership reads as "not visible".

Both return a plain ``Select`` over ``GroupModel`` that callers may keep
composing (extra joins, filters, ordering).
"""

from __future__ import annotations

from typing import Protocol

from sqlalchemy import Select, and_, false, or_, select, true

from groups.domain.actors import Actor, SpaceUser, User
from groups.infrastructure.models import GroupModel, GroupUserModel, SpaceUserModel


class GroupVisibility(Protocol):
    """Builds the "groups visible to this actor" query."""

    def groups_query(self) -> Select[tuple[GroupModel]]:
        """Return a composable select of visible groups."""
        ...


class SpaceUserVisibility:
    """Visibility for a member of one space."""

    def __init__(self, space_user: SpaceUser) -> None:
        self._space_user = space_user

    def groups_query(self) -> Select[tuple[GroupModel]]:
        membership = GroupUserModel
        return (
            select(GroupModel)
            .where(GroupModel.space_id == self._space_user.space_id.value)
            .outerjoin(
                membership,
                and_(
                    membership.group_id == GroupModel.id,
                    membership.space_user_id == self._space_user.id.value,
                ),
            )
            .where(
                or_(
                    GroupModel.is_private == false(),
                    and_(GroupModel.is_private == true(), membership.id.is_not(None)),
                )
            )
        )


class UserVisibility:
    """Visibility for a global user, across every space."""

    def __init__(self, user: User) -> None:
        self._user = user

    def groups_query(self) -> Select[tuple[GroupModel]]:
        # At most one row per group: a user has one space user per space and
        # a space user one membership per group.
        membership = (
            select(
                GroupUserModel.group_id.label("group_id"),
                GroupUserModel.id.label("group_user_id"),
                SpaceUserModel.id.label("space_user_id"),
            )
            .join(
                SpaceUserModel,
                and_(
                    GroupUserModel.space_user_id == SpaceUserModel.id,
                    SpaceUserModel.user_id == self._user.id.value,
                ),
            )
            .subquery("user_memberships")
        )
        return (
            select(GroupModel)
            .outerjoin(membership, membership.c.group_id == GroupModel.id)
            .where(
                or_(
                    GroupModel.is_private == false(),
                    and_(
                        GroupModel.is_private == true(),
                        membership.c.group_user_id.is_not(None),
                        membership.c.space_user_id.is_not(None),
                    ),
                )
            )
        )


def visibility_for(actor: Actor) -> GroupVisibility:
    """Pick the visibility variant for an actor.

    Raises:
        TypeError: If the actor is neither a SpaceUser nor a User
    """
    if isinstance(actor, SpaceUser):
        return SpaceUserVisibility(actor)
    if isinstance(actor, User):
        return UserVisibility(actor)
    raise TypeError(f"Unsupported actor type: {type(actor).__name__}")


def visible_groups_query(actor: Actor) -> Select[tuple[GroupModel]]:
    """Select all groups visible to ``actor``."""
    return visibility_for(actor).groups_query()

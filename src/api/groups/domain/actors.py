"""Actors that can request access to groups.

An actor is either a space user (a member of one space) or a global user
(whose space affiliations are resolved through their space users). Both
are already authenticated when they reach this context.
"""

from __future__ import annotations

from dataclasses import dataclass

from groups.domain.value_objects import SpaceId, SpaceUserId, UserId


@dataclass(frozen=True)
class SpaceUser:
    """A user's membership in one space.

    Attributes:
        id: The space user id (the key memberships and bookmarks refer to)
        space_id: The space this member belongs to
        user_id: The global user behind this member
    """

    id: SpaceUserId
    space_id: SpaceId
    user_id: UserId


@dataclass(frozen=True)
class User:
    """A global user identity, not scoped to any space."""

    id: UserId


Actor = SpaceUser | User

"""Space user to group edges: memberships and bookmarks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from groups.domain.value_objects import GroupId, SpaceId, SpaceUserId


@dataclass(frozen=True)
class GroupMembership:
    """A space user's durable affiliation with a group.

    Membership is what grants access to a private group. There is at most
    one per (group, space user); it is never updated.
    """

    id: str
    space_id: SpaceId
    group_id: GroupId
    space_user_id: SpaceUserId
    inserted_at: datetime | None = None


@dataclass(frozen=True)
class GroupBookmark:
    """A space user's shortcut to a group. Grants no access."""

    id: str
    space_id: SpaceId
    group_id: GroupId
    space_user_id: SpaceUserId
    inserted_at: datetime | None = None

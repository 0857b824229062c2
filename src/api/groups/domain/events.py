"""Domain events published by the Groups context.

Events are immutable facts handed to the EventPublisher after the
transaction that produced them commits. Each event names its topic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import ClassVar

from groups.domain.aggregates import Group
from groups.domain.value_objects import SpaceUserId


@dataclass(frozen=True)
class GroupBookmarked:
    """A space user bookmarked a group.

    Attributes:
        group: The bookmarked group
        space_user_id: Who bookmarked it
        occurred_at: When the bookmark row was inserted (UTC)
    """

    topic: ClassVar[str] = "group_bookmarked"

    group: Group
    space_user_id: SpaceUserId
    occurred_at: datetime

    @classmethod
    def now(cls, group: Group, space_user_id: SpaceUserId) -> GroupBookmarked:
        return cls(
            group=group, space_user_id=space_user_id, occurred_at=datetime.now(UTC)
        )


@dataclass(frozen=True)
class GroupUnbookmarked:
    """A space user removed their bookmark of a group."""

    topic: ClassVar[str] = "group_unbookmarked"

    group: Group
    space_user_id: SpaceUserId
    occurred_at: datetime

    @classmethod
    def now(cls, group: Group, space_user_id: SpaceUserId) -> GroupUnbookmarked:
        return cls(
            group=group, space_user_id=space_user_id, occurred_at=datetime.now(UTC)
        )


DomainEvent = GroupBookmarked | GroupUnbookmarked

"""Application-layer value objects for the Groups bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from groups.domain.aggregates import Group, GroupMembership


@dataclass(frozen=True)
class GroupCreation:
    """Outcome of the group creation workflow.

    The group and the creator's membership are always present: if either
    insert fails nothing is committed. ``bookmarked`` reports whether the
    creator's bookmark was inserted; a failed bookmark never fails creation.
    """

    group: Group
    group_user: GroupMembership
    bookmarked: bool

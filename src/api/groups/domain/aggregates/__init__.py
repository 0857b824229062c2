"""Aggregates and entities of the Groups domain."""

from groups.domain.aggregates.edges import GroupBookmark, GroupMembership
from groups.domain.aggregates.group import Group

__all__ = ["Group", "GroupBookmark", "GroupMembership"]

"""Application services for the Groups bounded context."""

from groups.application.services.group_service import GroupService

__all__ = [
    "GroupService",
]

"""Errors surfaced by Groups repositories and services.

NotFound, NotAMember and validation errors are safe to show to end users
(through the message catalog). UnexpectedStorageError always renders as a
generic failure; its cause is chained for logs only. LoaderConfigurationError
signals a caller bug and is not meant to be caught.
"""

from __future__ import annotations

from groups.domain.exceptions import GroupsError, GroupValidationError
from shared_kernel.messages import MessageCatalog
from shared_kernel.transactions import TransactionStepError

__all__ = [
    "GroupNotFoundError",
    "GroupValidationError",
    "GroupsError",
    "LoaderConfigurationError",
    "NotAGroupMemberError",
    "TransactionStepError",
    "UnexpectedStorageError",
    "render_error",
]


class GroupNotFoundError(GroupsError):
    """Raised when a group does not exist or the actor may not see it.

    The two cases are deliberately indistinguishable so that private groups
    do not leak their existence.
    """

    message_id = "Group not found"


class NotAGroupMemberError(GroupsError):
    """Raised when a space user has no membership in the group."""

    message_id = "The user is a not a group member"


class UnexpectedStorageError(GroupsError):
    """Raised for storage failures that are not a known constraint violation.

    Chain the original error with ``raise ... from``; it is never shown.
    """

    message_id = "An unexpected error occurred"


class LoaderConfigurationError(RuntimeError):
    """Raised when the groups loader is built or queried incorrectly.

    Missing authentication or an unsupported entity type is a programming
    error in the caller, not a runtime condition to recover from.
    """

    pass


def render_error(error: GroupsError, catalog: MessageCatalog) -> str:
    """Render the user-facing text for an error.

    Validation errors render their field messages, everything else renders
    its message identifier. Storage details are never included.
    """
    if isinstance(error, GroupValidationError):
        parts = [
            f"{field} {catalog.lookup(error.domain, message)}"
            for field, messages in error.errors.items()
            for message in messages
        ]
        return "; ".join(parts)
    return catalog.lookup(error.domain, error.message_id)

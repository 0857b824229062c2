"""Errors raised by Groups domain objects.

Every error carries a message identifier and catalog domain so the
presentation layer can render localized text without inspecting types.
"""

from __future__ import annotations

from collections.abc import Mapping


class GroupsError(Exception):
    """Base class for errors that are safe to report to end users.

    Attributes:
        message_id: Catalog key (also the English text)
        domain: Catalog domain the key belongs to
    """

    message_id: str = "An unexpected error occurred"
    domain: str = "errors"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message_id)


class GroupValidationError(GroupsError):
    """Raised when group, membership or bookmark attributes are invalid.

    Attributes:
        errors: Field name to list of message identifiers
    """

    message_id = "Validation failed"

    def __init__(self, errors: Mapping[str, list[str]]) -> None:
        self.errors: dict[str, list[str]] = {k: list(v) for k, v in errors.items()}
        detail = "; ".join(
            f"{field} {', '.join(messages)}" for field, messages in self.errors.items()
        )
        super().__init__(detail)

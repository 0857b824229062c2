"""Group aggregate for the Groups context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from groups.domain.actors import SpaceUser
from groups.domain.exceptions import GroupValidationError
from groups.domain.value_objects import GroupId, GroupState, SpaceId, SpaceUserId

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000

_UPDATABLE_FIELDS = frozenset({"name", "description", "is_private"})


@dataclass
class Group:
    """A named collection of space users inside one space.

    Business rules:
    - A group belongs to exactly one space and records the space user who
      created it
    - The name is required, trimmed and at most 255 characters
    - Private groups are readable only by their members
    - Closing is one-way: an OPEN group can become CLOSED, never the reverse
    """

    id: GroupId
    space_id: SpaceId
    creator_id: SpaceUserId
    name: str
    description: str | None = None
    is_private: bool = False
    state: GroupState = GroupState.OPEN
    inserted_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        creator: SpaceUser,
        name: Any,
        description: Any = None,
        is_private: Any = False,
    ) -> Group:
        """Build a validated, not yet persisted group.

        Space and creator come from the acting space user, never from the
        caller's attributes.

        Raises:
            GroupValidationError: If any attribute is invalid
        """
        attributes = _validate(
            {"name": name, "description": description, "is_private": is_private},
            required=("name",),
        )
        return cls(
            id=GroupId.generate(),
            space_id=creator.space_id,
            creator_id=creator.id,
            **attributes,
        )

    def update(self, **changes: Any) -> None:
        """Apply a partial update of name, description and/or is_private.

        Nothing is changed unless every given attribute is valid.

        Raises:
            GroupValidationError: If an attribute is unknown or invalid
        """
        unknown = sorted(set(changes) - _UPDATABLE_FIELDS)
        if unknown:
            raise GroupValidationError({key: ["is not updatable"] for key in unknown})

        attributes = _validate(changes, required=())
        for key, value in attributes.items():
            setattr(self, key, value)

    def close(self) -> None:
        """Mark the group CLOSED. Closing a closed group changes nothing."""
        self.state = GroupState.CLOSED

    @property
    def is_closed(self) -> bool:
        return self.state == GroupState.CLOSED


def _validate(attributes: dict[str, Any], required: tuple[str, ...]) -> dict[str, Any]:
    errors: dict[str, list[str]] = {}
    cleaned: dict[str, Any] = {}

    if "name" in attributes:
        name = attributes["name"]
        if name is None or (isinstance(name, str) and not name.strip()):
            errors.setdefault("name", []).append("can't be blank")
        elif not isinstance(name, str):
            errors.setdefault("name", []).append("is invalid")
        elif len(name.strip()) > NAME_MAX_LENGTH:
            errors.setdefault("name", []).append("should be at most 255 character(s)")
        else:
            cleaned["name"] = name.strip()
    elif "name" in required:
        errors.setdefault("name", []).append("can't be blank")

    if "description" in attributes:
        description = attributes["description"]
        if description is not None and not isinstance(description, str):
            errors.setdefault("description", []).append("is invalid")
        elif description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
            errors.setdefault("description", []).append(
                "should be at most 1000 character(s)"
            )
        else:
            cleaned["description"] = description

    if "is_private" in attributes:
        if not isinstance(attributes["is_private"], bool):
            errors.setdefault("is_private", []).append("is invalid")
        else:
            cleaned["is_private"] = attributes["is_private"]

    if errors:
        raise GroupValidationError(errors)
    return cleaned

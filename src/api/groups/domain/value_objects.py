"""Value objects for the Groups domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeVar

from ulid import ULID

_IdT = TypeVar("_IdT", bound="_UlidId")


@dataclass(frozen=True)
class _UlidId:
    """ULID-backed identifier; sortable and generated without coordination."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls: type[_IdT]) -> _IdT:
        """Generate a new identifier."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls: type[_IdT], value: str) -> _IdT:
        """Create an identifier from its string form.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid {cls.__name__}: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class GroupId(_UlidId):
    """Identifier for a Group aggregate."""


@dataclass(frozen=True)
class SpaceId(_UlidId):
    """Identifier for a space (tenant)."""


@dataclass(frozen=True)
class SpaceUserId(_UlidId):
    """Identifier for a space user (tenant-scoped member)."""


@dataclass(frozen=True)
class UserId(_UlidId):
    """Identifier for a global user identity."""


class GroupState(StrEnum):
    """Lifecycle state of a group. CLOSED is terminal."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"

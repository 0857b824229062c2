"""Classification of integrity errors by the constraint they violated.

Repositories use uniqueness violations as control flow (an existing bookmark
means "already bookmarked"). This module turns a driver-specific
``IntegrityError`` into a ``ConstraintViolation`` naming the violated
constraint, so callers compare names instead of parsing messages.

Supported drivers:
- asyncpg: the adapted error's ``__cause__`` carries ``sqlstate`` and
  ``constraint_name``
- psycopg: ``orig.diag.constraint_name`` and ``orig.sqlstate``
- sqlite (aiosqlite): only the message is available; column lists are
  resolved back to a unique constraint or index through the metadata
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from sqlalchemy import Index, MetaData, Table, UniqueConstraint
from sqlalchemy.exc import IntegrityError

from infrastructure.database.models import Base


class ViolationKind(StrEnum):
    """Kind of integrity constraint that was violated."""

    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    NOT_NULL = "not_null"
    CHECK = "check"
    UNKNOWN = "unknown"


_SQLSTATE_KINDS = {
    "23505": ViolationKind.UNIQUE,
    "23503": ViolationKind.FOREIGN_KEY,
    "23502": ViolationKind.NOT_NULL,
    "23514": ViolationKind.CHECK,
}

_SQLITE_UNIQUE_INDEX = re.compile(r"UNIQUE constraint failed: index '(?P<name>[^']+)'")
_SQLITE_UNIQUE_COLUMNS = re.compile(r"UNIQUE constraint failed: (?P<columns>.+)")
_SQLITE_CHECK = re.compile(r"CHECK constraint failed: (?P<name>\S+)")


@dataclass(frozen=True)
class ConstraintViolation:
    """The constraint an insert or update tripped over.

    Attributes:
        kind: Which family of constraint was violated
        constraint: Constraint or index name, when the driver reports it
    """

    kind: ViolationKind
    constraint: str | None = None

    def is_unique(self, constraint: str) -> bool:
        """Whether this is a uniqueness violation of the named constraint."""
        return self.kind == ViolationKind.UNIQUE and self.constraint == constraint


def violated_constraint(
    error: IntegrityError, metadata: MetaData | None = None
) -> ConstraintViolation:
    """Identify the constraint behind an IntegrityError.

    Args:
        error: The error raised by flush/execute
        metadata: Metadata used to resolve SQLite column lists to constraint
            names (defaults to ``Base.metadata``)

    Returns:
        The classified violation; ``kind`` is UNKNOWN when nothing matched
    """
    orig = error.orig
    for candidate in (getattr(orig, "__cause__", None), orig):
        if candidate is None:
            continue
        violation = _from_sqlstate(candidate)
        if violation is not None:
            return violation

    return _from_sqlite_message(str(orig), metadata or Base.metadata)


def _from_sqlstate(exc: Any) -> ConstraintViolation | None:
    sqlstate = getattr(exc, "sqlstate", None) or getattr(exc, "pgcode", None)
    if not isinstance(sqlstate, str):
        return None

    kind = _SQLSTATE_KINDS.get(sqlstate, ViolationKind.UNKNOWN)
    constraint = getattr(exc, "constraint_name", None)
    if constraint is None:
        diag = getattr(exc, "diag", None)
        constraint = getattr(diag, "constraint_name", None)
    return ConstraintViolation(kind=kind, constraint=constraint)


def _from_sqlite_message(message: str, metadata: MetaData) -> ConstraintViolation:
    if match := _SQLITE_UNIQUE_INDEX.search(message):
        return ConstraintViolation(ViolationKind.UNIQUE, match.group("name"))

    if match := _SQLITE_UNIQUE_COLUMNS.search(message):
        qualified = [c.strip() for c in match.group("columns").split(",")]
        return ConstraintViolation(
            ViolationKind.UNIQUE, _unique_name_for_columns(qualified, metadata)
        )

    if "FOREIGN KEY constraint failed" in message:
        return ConstraintViolation(ViolationKind.FOREIGN_KEY)

    if "NOT NULL constraint failed" in message:
        return ConstraintViolation(ViolationKind.NOT_NULL)

    if match := _SQLITE_CHECK.search(message):
        return ConstraintViolation(ViolationKind.CHECK, match.group("name"))

    return ConstraintViolation(ViolationKind.UNKNOWN)


def _unique_name_for_columns(qualified: list[str], metadata: MetaData) -> str | None:
    """Map ``table.column`` pairs from a SQLite message to a constraint name."""
    table_names = {q.split(".", 1)[0] for q in qualified if "." in q}
    if len(table_names) != 1:
        return None
    table = metadata.tables.get(table_names.pop())
    if table is None:
        return None

    columns = {q.split(".", 1)[1] for q in qualified}
    for name, constraint_columns in _unique_column_sets(table):
        if constraint_columns == columns:
            return name
    return None


def _unique_column_sets(table: Table) -> list[tuple[str | None, set[str]]]:
    sets: list[tuple[str | None, set[str]]] = []
    for constraint in table.constraints:
        if isinstance(constraint, UniqueConstraint):
            sets.append((_name(constraint), {c.name for c in constraint.columns}))
    for index in table.indexes:
        if isinstance(index, Index) and index.unique:
            sets.append((_name(index), {c.name for c in index.columns}))
    return sets


def _name(item: UniqueConstraint | Index) -> str | None:
    return str(item.name) if item.name is not None else None

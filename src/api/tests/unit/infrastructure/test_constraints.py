"""Unit tests for IntegrityError classification."""

import sqlite3

import pytest
from sqlalchemy.exc import IntegrityError

from groups.infrastructure.models import (
    GROUP_BOOKMARK_UNIQUE,
    GROUP_NAME_UNIQUE,
    GROUP_USER_UNIQUE,
)
from infrastructure.database.constraints import (
    ConstraintViolation,
    ViolationKind,
    violated_constraint,
)


class AsyncpgLikeError(Exception):
    def __init__(self, sqlstate, constraint_name=None):
        super().__init__(sqlstate)
        self.sqlstate = sqlstate
        self.constraint_name = constraint_name


class AdaptedError(Exception):
    """SQLAlchemy's asyncpg adapter wraps the driver error as ``__cause__``."""


def _error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT", {}, orig)


class TestSqlstateDrivers:
    def test_unique_violation_reports_constraint(self):
        violation = violated_constraint(
            _error(AsyncpgLikeError("23505", GROUP_BOOKMARK_UNIQUE))
        )

        assert violation == ConstraintViolation(
            ViolationKind.UNIQUE, GROUP_BOOKMARK_UNIQUE
        )
        assert violation.is_unique(GROUP_BOOKMARK_UNIQUE)

    def test_reads_driver_error_from_adapter_cause(self):
        adapted = AdaptedError("duplicate key")
        adapted.__cause__ = AsyncpgLikeError("23505", GROUP_USER_UNIQUE)

        violation = violated_constraint(_error(adapted))

        assert violation.is_unique(GROUP_USER_UNIQUE)

    @pytest.mark.parametrize(
        ("sqlstate", "kind"),
        [
            ("23503", ViolationKind.FOREIGN_KEY),
            ("23502", ViolationKind.NOT_NULL),
            ("23514", ViolationKind.CHECK),
            ("23P01", ViolationKind.UNKNOWN),
        ],
    )
    def test_maps_sqlstate_to_kind(self, sqlstate, kind):
        violation = violated_constraint(_error(AsyncpgLikeError(sqlstate, "c")))

        assert violation.kind == kind

    def test_other_unique_constraint_does_not_match(self):
        violation = violated_constraint(
            _error(AsyncpgLikeError("23505", GROUP_NAME_UNIQUE))
        )

        assert not violation.is_unique(GROUP_BOOKMARK_UNIQUE)


class TestSqliteMessages:
    def test_unique_columns_resolve_to_constraint_name(self):
        orig = sqlite3.IntegrityError(
            "UNIQUE constraint failed: "
            "group_bookmarks.space_user_id, group_bookmarks.group_id"
        )

        assert violated_constraint(_error(orig)).is_unique(GROUP_BOOKMARK_UNIQUE)

    def test_membership_columns_resolve_to_membership_constraint(self):
        orig = sqlite3.IntegrityError(
            "UNIQUE constraint failed: group_users.space_user_id, group_users.group_id"
        )

        assert violated_constraint(_error(orig)).is_unique(GROUP_USER_UNIQUE)

    def test_expression_index_is_reported_by_name(self):
        orig = sqlite3.IntegrityError(
            f"UNIQUE constraint failed: index '{GROUP_NAME_UNIQUE}'"
        )

        assert violated_constraint(_error(orig)).is_unique(GROUP_NAME_UNIQUE)

    def test_foreign_key(self):
        orig = sqlite3.IntegrityError("FOREIGN KEY constraint failed")

        assert violated_constraint(_error(orig)).kind == ViolationKind.FOREIGN_KEY

    def test_unknown_table_has_no_constraint_name(self):
        orig = sqlite3.IntegrityError("UNIQUE constraint failed: nowhere.id")

        violation = violated_constraint(_error(orig))

        assert violation.kind == ViolationKind.UNIQUE
        assert violation.constraint is None

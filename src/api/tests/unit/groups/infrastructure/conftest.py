"""Fixtures for Groups infrastructure unit tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError


class FakeDriverError(Exception):
    """Mimics an asyncpg error carrying SQLSTATE and constraint name."""

    def __init__(self, sqlstate: str, constraint_name: str | None = None):
        super().__init__(f"{sqlstate} {constraint_name}")
        self.sqlstate = sqlstate
        self.constraint_name = constraint_name


@pytest.fixture
def integrity_error():
    """Build an IntegrityError as SQLAlchemy raises it on flush."""

    def build(sqlstate: str, constraint_name: str | None = None) -> IntegrityError:
        return IntegrityError(
            "INSERT", {}, FakeDriverError(sqlstate, constraint_name)
        )

    return build


@pytest.fixture
def mock_probe():
    """Create mock repository probe."""
    return MagicMock()


@pytest.fixture
def failing_savepoint(mock_session):
    """Make the next SAVEPOINT release raise the given error."""

    def fail_with(error: Exception) -> None:
        savepoint = MagicMock()
        savepoint.__aenter__ = AsyncMock(return_value=None)
        savepoint.__aexit__ = AsyncMock(side_effect=error)
        mock_session.begin_nested = MagicMock(return_value=savepoint)

    return fail_with

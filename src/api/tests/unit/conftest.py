"""Unit test fixtures shared across bounded contexts."""

import pytest

from infrastructure.settings import (
    get_database_settings,
    get_i18n_settings,
    get_pubsub_settings,
    get_settings,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start each test from the environment."""
    for getter in (
        get_settings,
        get_database_settings,
        get_pubsub_settings,
        get_i18n_settings,
    ):
        getter.cache_clear()
    yield

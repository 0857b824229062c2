"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    DatabaseSettings,
    I18nSettings,
    PubsubSettings,
    Settings,
)


class TestDatabaseSettings:
    def test_defaults(self):
        settings = DatabaseSettings()

        assert settings.host == "localhost"
        assert settings.port == 5432
        assert settings.pool_size >= 1
        assert settings.url is None

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("LEVEL_DB_HOST", "db.internal")
        monkeypatch.setenv("LEVEL_DB_POOL_SIZE", "4")

        settings = DatabaseSettings()

        assert settings.host == "db.internal"
        assert settings.pool_size == 4

    def test_password_is_secret(self):
        settings = DatabaseSettings(password="hunter2")

        assert "hunter2" not in repr(settings)
        assert settings.password.get_secret_value() == "hunter2"

    def test_url_must_name_async_driver(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(url="postgresql://localhost/level")

    def test_pool_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_size=0)

    def test_connection_string_omits_password(self):
        settings = DatabaseSettings(password="hunter2")

        assert "hunter2" not in settings.connection_string
        assert settings.connection_string == "postgresql://level@localhost:5432/level"


class TestPubsubSettings:
    def test_default_queue_size(self):
        assert PubsubSettings().queue_size == 1000

    def test_queue_size_from_environment(self, monkeypatch):
        monkeypatch.setenv("LEVEL_PUBSUB_QUEUE_SIZE", "10")

        assert PubsubSettings().queue_size == 10

    def test_queue_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            PubsubSettings(queue_size=0)


class TestI18nSettings:
    def test_defaults(self):
        settings = I18nSettings()

        assert settings.default_locale == "en"
        assert settings.locale_dir is None


class TestSettings:
    def test_app_defaults(self):
        settings = Settings()

        assert settings.app_name == "Level"
        assert settings.debug is False

    def test_exposes_sections(self):
        settings = Settings()

        assert isinstance(settings.database, DatabaseSettings)
        assert isinstance(settings.pubsub, PubsubSettings)
        assert isinstance(settings.i18n, I18nSettings)

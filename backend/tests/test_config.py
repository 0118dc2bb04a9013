"""
CourseDesk Backend — Settings Tests
=====================================

What:  Environment parsing for the settings that select deployment variants.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from coursedesk.config import Settings
from coursedesk.database import Database


class TestSettings:

    def test_cors_wildcard_default(self, monkeypatch):
        monkeypatch.delenv("CORS_ORIGINS", raising=False)
        settings = Settings()

        assert settings.cors_origins_list == ["*"]
        assert settings.cors_allows_any_origin

    def test_cors_origin_list_is_split(self):
        settings = Settings(cors_origins="https://a.example.com, https://b.example.com,")

        assert settings.cors_origins_list == ["https://a.example.com", "https://b.example.com"]
        assert not settings.cors_allows_any_origin

    def test_port_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "5050")

        assert Settings().backend_port == 5050

    def test_connect_on_startup_from_env(self, monkeypatch):
        monkeypatch.setenv("DATABASE_CONNECT_ON_STARTUP", "true")

        assert Settings().database_connect_on_startup is True

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="chatty")

    def test_database_from_settings(self):
        settings = Settings(database_url="sqlite+aiosqlite:///x.db", log_level="DEBUG")

        database = Database.from_settings(settings)

        assert database.url == "sqlite+aiosqlite:///x.db"
        assert database._engine_options["echo"] is True

"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from meeting_bot_mcp.config import Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})

        assert settings.api_url == "http://localhost:8000"
        assert settings.api_key is None
        assert settings.base_url == "http://localhost:8000/api/v1"
        assert settings.timeout == 30.0

    def test_env_overrides(self):
        settings = Settings.from_env({
            "MEETING_BOT_API_URL": "https://bots.example.com/",
            "MEETING_BOT_API_KEY": "abc",
            "MEETING_BOT_API_PREFIX": "api/v2/",
            "MEETING_BOT_TIMEOUT": "12.5",
            "MEETING_BOT_LOG_LEVEL": "debug",
        })

        assert settings.base_url == "https://bots.example.com/api/v2"
        assert settings.api_key == "abc"
        assert settings.timeout == 12.5
        assert settings.log_level == "DEBUG"

    def test_empty_key_means_unauthenticated(self):
        assert Settings.from_env({"MEETING_BOT_API_KEY": ""}).api_key is None

    def test_invalid_timeout(self):
        with pytest.raises(ValidationError):
            Settings.from_env({"MEETING_BOT_TIMEOUT": "0"})

    def test_settings_are_immutable(self):
        settings = Settings()

        with pytest.raises(ValidationError):
            settings.api_url = "http://elsewhere"

"""Tests for settings loading and the process-wide settings cache."""

import pytest
from pydantic import ValidationError

from promptclient.config import (
    OPENAI_CHAT_COMPLETIONS_URL,
    PromptClientSettings,
    get_settings,
    load_settings,
    reload_settings,
)
from promptclient.exceptions import ConfigurationError


class TestLoadSettings:
    """Test building settings from the environment and overrides."""

    def test_defaults(self):
        settings = load_settings()

        assert settings.openai_api_key == "sk-test-key"
        assert settings.api_url == OPENAI_CHAT_COMPLETIONS_URL
        assert settings.request_timeout_ms == 10_000
        assert settings.request_timeout_s == 10.0
        assert settings.default_temperature == 0.0
        assert settings.default_model == "gpt-4-1106-preview"
        assert settings.exit_on_parse_error is False

    def test_missing_api_key_fails_fast(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.delenv("PROMPTCLIENT_OPENAI_API_KEY", raising=False)

        with pytest.raises(ConfigurationError, match="Provide OPENAI_API_KEY as an env var"):
            load_settings()

    def test_empty_api_key_fails_fast(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "")

        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            load_settings()

    def test_prefixed_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PROMPTCLIENT_DEFAULT_MODEL", "gpt-4o-mini")
        monkeypatch.setenv("PROMPTCLIENT_REQUEST_TIMEOUT_MS", "2500")

        settings = load_settings()

        assert settings.default_model == "gpt-4o-mini"
        assert settings.request_timeout_ms == 2500

    def test_direct_overrides_win(self, monkeypatch):
        monkeypatch.setenv("PROMPTCLIENT_DEFAULT_TEMPERATURE", "1.0")

        settings = load_settings(default_temperature=0.3, openai_api_key="sk-other")

        assert settings.default_temperature == 0.3
        assert settings.openai_api_key == "sk-other"

    def test_out_of_range_value_is_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_settings(request_timeout_ms=0)

    def test_settings_are_immutable(self):
        settings = load_settings()

        with pytest.raises(ValidationError):
            settings.request_timeout_ms = 1


class TestSettingsCache:
    """Test get_settings / reload_settings."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
        assert isinstance(get_settings(), PromptClientSettings)

    def test_reload_picks_up_environment_changes(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("OPENAI_API_KEY", "sk-rotated")

        assert get_settings().openai_api_key == first.openai_api_key
        assert reload_settings().openai_api_key == "sk-rotated"
        assert get_settings().openai_api_key == "sk-rotated"

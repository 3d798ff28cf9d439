"""Configuration management using pydantic-settings.

The client reads one process-wide, immutable settings object. It is built
once (lazily, on first use) and never mutated afterwards; callers that need
different values construct their own instance and hand it to PromptClient.

Configuration Sources (in order of precedence):
    1. Direct instantiation parameters
    2. Environment variables (prefixed with PROMPTCLIENT_, except the API key
       which is also read from OPENAI_API_KEY)
    3. .env file in project root

Available Settings:
    - Credentials: openai_api_key (required)
    - Endpoint: api_url, request_timeout_ms
    - Request defaults: default_model, default_temperature
    - Parse failures: exit_on_parse_error

Example:
    >>> from promptclient.config import get_settings, reload_settings
    >>>
    >>> settings = get_settings()
    >>> settings.request_timeout_ms
    10000
    >>>
    >>> # Reload after changing .env
    >>> settings = reload_settings()
"""

from pathlib import Path
from typing import Annotated, Any

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from promptclient.exceptions import ConfigurationError

# Find the project root (where .env file is located)
_project_root = Path(__file__).parent.parent
_env_file = _project_root / ".env"

OPENAI_API_KEY_VAR_NAME = "OPENAI_API_KEY"
OPENAI_CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"


class PromptClientSettings(BaseSettings):
    """Settings shared by every request made from this process.

    Configuration values can be set via:
    1. Environment variables (e.g., OPENAI_API_KEY, PROMPTCLIENT_DEFAULT_MODEL)
    2. .env file in the project root
    3. Direct instantiation with parameters
    """

    model_config = SettingsConfigDict(
        env_prefix="PROMPTCLIENT_",
        env_file=_env_file,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    openai_api_key: Annotated[
        str,
        Field(
            min_length=1,
            validation_alias=AliasChoices(OPENAI_API_KEY_VAR_NAME, "PROMPTCLIENT_OPENAI_API_KEY", "openai_api_key"),
        ),
    ]

    api_url: str = OPENAI_CHAT_COMPLETIONS_URL
    request_timeout_ms: Annotated[int, Field(gt=0)] = 10_000

    default_model: str = "gpt-4-1106-preview"
    default_temperature: Annotated[float, Field(ge=0.0, le=2.0)] = 0.0

    # Legacy behaviour: terminate the process when the model output does not
    # match the requested schema instead of raising ContentParseError.
    exit_on_parse_error: bool = False

    @property
    def request_timeout_s(self) -> float:
        return self.request_timeout_ms / 1000


def load_settings(**overrides: Any) -> PromptClientSettings:
    """Build a settings instance, failing fast on missing or invalid values.

    Args:
        **overrides: Field values that take precedence over the environment

    Returns:
        PromptClientSettings: A new, frozen settings instance

    Raises:
        ConfigurationError: If the API key is absent or a value is out of range
    """
    try:
        return PromptClientSettings(**overrides)
    except ValidationError as e:
        missing_key = any(
            err.get("type") in ("missing", "string_too_short")
            and any("api_key" in str(part).lower() for part in err.get("loc", ()))
            for err in e.errors()
        )
        if missing_key:
            raise ConfigurationError(f"Provide {OPENAI_API_KEY_VAR_NAME} as an env var") from e
        raise ConfigurationError(f"Invalid configuration: {e}") from e


_settings: PromptClientSettings | None = None


def get_settings() -> PromptClientSettings:
    """Get the process-wide settings instance, creating it on first use.

    Returns:
        PromptClientSettings: The shared settings instance
    """
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reload_settings() -> PromptClientSettings:
    """Reload settings from environment and .env file.

    Returns:
        PromptClientSettings: A new settings instance
    """
    global _settings
    _settings = None
    return get_settings()


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None

"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from ``JIRA_*`` environment
variables (or a ``.env`` file) with the defaults below.

Example:
    >>> from jira_mcp.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.rest_api_url
    'https://jira.example.com/rest/api/2'
    >>> settings.timeout_seconds
    30.0

    # Environment:
    # JIRA_BASE_URL=https://jira.example.com/
    # JIRA_USERNAME=bot
    # JIRA_PASSWORD=secret
    # JIRA_PROJECTS_FILTER=kp, ops
    # JIRA_RESPONSE_FORMAT=toon

Settings are loaded once by the entry point and handed to every component
that needs them; nothing else reads the environment.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import (
    Field,
    NonNegativeInt,
    PositiveFloat,
    PositiveInt,
    SecretStr,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from jira_mcp.formats.response import ResponseFormat
from jira_mcp.foundation.errors import ConfigurationError

REST_API_PREFIX = "/rest/api/2"
AGILE_API_PREFIX = "/rest/agile/1.0"

_FALSE_TOKENS: frozenset[str] = frozenset({"false", "0"})

# Required connection settings, checked in declaration order
_REQUIRED: tuple[tuple[str, str], ...] = (
    ("base_url", "JIRA_BASE_URL"),
    ("username", "JIRA_USERNAME"),
    ("password", "JIRA_PASSWORD"),
)


class JiraSettings(BaseSettings):
    """Connection, transport, cache and output settings.

    Example environment variables:
        JIRA_BASE_URL=https://jira.example.com
        JIRA_USERNAME=bot
        JIRA_PASSWORD=secret          (password or API token)
        JIRA_PROJECTS_FILTER=KP,OPS   (optional allow-list)
        JIRA_RESPONSE_FORMAT=toon     (json by default)
        JIRA_TIMEOUT=30000            (ms, per attempt)
        JIRA_RETRY_COUNT=3            (attempts after the first)
        JIRA_RETRY_DELAY=1000         (ms, backoff base)
        JIRA_SSL_VERIFY=false         (self-signed test instances only)
        JIRA_CACHE_TTL=300            (seconds)
    """

    model_config = SettingsConfigDict(
        env_prefix="JIRA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        validate_default=True,
    )

    base_url: str = Field(default="", description="Jira instance root URL")
    username: str = Field(default="", description="Basic-Auth principal")
    password: SecretStr = Field(default=SecretStr(""), description="Basic-Auth secret or API token")
    projects_filter: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(),
        description="Upper-cased project keys that project-scoped listings are limited to",
    )
    response_format: ResponseFormat = ResponseFormat.JSON
    timeout: PositiveInt = Field(default=30_000, description="Per-attempt timeout in milliseconds")
    retry_count: NonNegativeInt = 3
    retry_delay: NonNegativeInt = Field(default=1_000, description="Backoff base in milliseconds")
    ssl_verify: bool = True
    cache_ttl: PositiveFloat = Field(default=300.0, description="Default cache TTL in seconds")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json", "none"] = "console"

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @field_validator("projects_filter", mode="before")
    @classmethod
    def _parse_projects(cls, v: str | list[str] | tuple[str, ...] | None) -> tuple[str, ...]:
        """Accept ``"kp, ops,,"`` or any iterable; normalize to upper-cased keys."""
        if v is None:
            return ()
        items = v.split(",") if isinstance(v, str) else v
        return tuple(p.strip().upper() for p in items if p and p.strip())

    @field_validator("response_format", mode="before")
    @classmethod
    def _parse_format(cls, v: object) -> ResponseFormat:
        """Only ``toon`` (any case) selects notation output."""
        if isinstance(v, str) and v.strip().lower() == ResponseFormat.TOON.value:
            return ResponseFormat.TOON
        return ResponseFormat.JSON

    @field_validator("ssl_verify", mode="before")
    @classmethod
    def _parse_flag(cls, v: object) -> bool:
        if isinstance(v, str):
            return v.strip().lower() not in _FALSE_TOKENS
        return bool(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.strip().upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def _require_connection(self) -> JiraSettings:
        """Fail fast on the first missing connection setting."""
        for field, env in _REQUIRED:
            value = getattr(self, field)
            if isinstance(value, SecretStr):
                value = value.get_secret_value()
            if not value:
                raise ConfigurationError(f"Missing {env} environment variable", variable=env)
        return self

    # ─────────────────────────────────────────────────────────────────
    # Derived values
    # ─────────────────────────────────────────────────────────────────

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000

    @property
    def retry_delay_seconds(self) -> float:
        return self.retry_delay / 1000

    @property
    def rest_api_url(self) -> str:
        return f"{self.base_url}{REST_API_PREFIX}"

    @property
    def agile_api_url(self) -> str:
        return f"{self.base_url}{AGILE_API_PREFIX}"

    def is_project_allowed(self, project_key: str) -> bool:
        """True when no filter is configured or the key is in it (case-insensitive)."""
        if not self.projects_filter:
            return True
        return project_key.upper() in self.projects_filter


def load_settings(**overrides: object) -> JiraSettings:
    """Build settings from the environment, raising ConfigurationError on any problem."""
    try:
        return JiraSettings(**overrides)  # type: ignore[arg-type]
    except ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else "settings"
        env = f"JIRA_{field.upper()}"
        raise ConfigurationError(f"Invalid {env}: {first['msg']}", variable=env) from e


# Singleton pattern for settings
@lru_cache(maxsize=1)
def get_settings() -> JiraSettings:
    """Get the process settings (loaded on first call, then cached).

    Raises:
        ConfigurationError: A required variable is missing or a value is invalid
    """
    return load_settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()

"""Process-wide configuration, read once from the environment at startup."""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_API_PREFIX = "/api/v1"
REQUEST_TIMEOUT = 30.0


class Settings(BaseModel):
    """Connection settings for the upstream meeting-bot API."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    api_url: str = Field(default=DEFAULT_API_URL, description="Base URL of the bot API server", min_length=1)
    api_key: Optional[str] = Field(default=None, description="API token; unset means unauthenticated mode")
    api_prefix: str = Field(default=DEFAULT_API_PREFIX, description="Path prefix of every endpoint")
    timeout: float = Field(default=REQUEST_TIMEOUT, description="Per-request timeout in seconds", gt=0)
    log_level: str = Field(default="INFO")

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = value.strip("/")
        return f"/{value}" if value else ""

    @field_validator("api_key")
    @classmethod
    def _empty_key_is_unset(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def base_url(self) -> str:
        return f"{self.api_url}{self.api_prefix}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from MEETING_BOT_* environment variables."""
        env = os.environ if environ is None else environ
        values = {
            "api_url": env.get("MEETING_BOT_API_URL"),
            "api_key": env.get("MEETING_BOT_API_KEY"),
            "api_prefix": env.get("MEETING_BOT_API_PREFIX"),
            "timeout": env.get("MEETING_BOT_TIMEOUT"),
            "log_level": env.get("MEETING_BOT_LOG_LEVEL"),
        }
        return cls(**{k: v for k, v in values.items() if v is not None})

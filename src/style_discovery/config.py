"""Application configuration."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from style_discovery.domain.settings import (
    DEFAULT_SESSION_LENGTH,
    DEFAULT_STANDOUT_COUNT,
    MIN_LIBRARY_SIZE,
    StudioSettings,
    clamp_session_length,
)

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    client_name: str | None = None
    default_session_length: int = DEFAULT_SESSION_LENGTH
    min_library_size: int = MIN_LIBRARY_SIZE
    standout_count: int = DEFAULT_STANDOUT_COUNT
    sampler_seed: int | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("default_session_length")
    @classmethod
    def _clamp_session_length(cls, value: int) -> int:
        return clamp_session_length(value)

    def studio_defaults(self) -> StudioSettings:
        """Return studio settings used when none are stored."""
        return StudioSettings(
            client_name=self.client_name,
            session_length=self.default_session_length,
            min_required_images=self.min_library_size,
            standout_count=self.standout_count,
        )

"""Studio settings service."""

from dataclasses import dataclass, replace
from typing import Protocol

from style_discovery.domain.models import StyleCategory
from style_discovery.domain.settings import (
    DEFAULT_CATEGORIES,
    StudioSettings,
    clamp_session_length,
)


class StudioSettingsRepository(Protocol):
    """Persistence interface for studio settings."""

    def get_settings(self) -> StudioSettings | None:
        """Return stored settings, if any."""

    def list_categories(self) -> list[StyleCategory]:
        """Return the style category catalog in declaration order."""


@dataclass
class StudioSettingsService:
    """Service for studio-level preferences."""

    repository: StudioSettingsRepository
    defaults: StudioSettings = StudioSettings()

    def get_settings(self) -> StudioSettings:
        """Return stored settings or defaults, with a clamped session length."""
        stored = self.repository.get_settings() or self.defaults
        return replace(
            stored,
            session_length=clamp_session_length(stored.session_length),
            min_required_images=max(1, stored.min_required_images),
        )

    def get_categories(self) -> list[StyleCategory]:
        """Return the category catalog, falling back to the default styles."""
        return self.repository.list_categories() or list(DEFAULT_CATEGORIES)

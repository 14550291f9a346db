"""Supabase repository for studio settings."""

from dataclasses import dataclass

from supabase import Client

from style_discovery.domain.models import StyleCategory
from style_discovery.domain.settings import (
    DEFAULT_SESSION_LENGTH,
    DEFAULT_STANDOUT_COUNT,
    MIN_LIBRARY_SIZE,
    StudioSettings,
)
from style_discovery.services.studio_settings import StudioSettingsRepository


@dataclass
class SupabaseStudioSettingsRepository(StudioSettingsRepository):
    """Supabase implementation for studio settings."""

    client: Client

    def get_settings(self) -> StudioSettings | None:
        """Return the stored studio settings row."""
        response = (
            self.client.table("studio_settings")
            .select("client_name, session_length, min_required_images, standout_count")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return StudioSettings(
            client_name=row.get("client_name") or None,
            session_length=_int_or_default(
                row, "session_length", DEFAULT_SESSION_LENGTH
            ),
            min_required_images=_int_or_default(
                row, "min_required_images", MIN_LIBRARY_SIZE
            ),
            standout_count=_int_or_default(
                row, "standout_count", DEFAULT_STANDOUT_COUNT
            ),
        )

    def list_categories(self) -> list[StyleCategory]:
        """Return style categories in declaration order."""
        response = (
            self.client.table("style_categories")
            .select("id, name")
            .order("position", desc=False)
            .execute()
        )
        return [
            StyleCategory(id=str(row["id"]), name=str(row.get("name", "")))
            for row in response.data or []
        ]


def _int_or_default(row: dict[str, object], key: str, default: int) -> int:
    """Read an integer column, falling back only when it is unset."""
    value = row.get(key)
    if value is None:
        return default
    return int(value)

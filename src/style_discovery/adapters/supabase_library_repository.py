"""Supabase implementation for the studio image library."""

from dataclasses import dataclass

from supabase import Client

from style_discovery.domain.models import LibraryImage
from style_discovery.services.library import LibraryRepository


@dataclass
class SupabaseLibraryRepository(LibraryRepository):
    """Supabase-backed repository for library images."""

    client: Client

    def list_images(self) -> list[LibraryImage]:
        """Return every library image in upload order."""
        response = (
            self.client.table("library_images")
            .select("id, url, room_type, style_category_ids, is_active")
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_image(row) for row in response.data or []]

    def set_active(self, image_id: str, is_active: bool) -> LibraryImage:
        """Update the active flag of an image and return it."""
        response = (
            self.client.table("library_images")
            .update({"is_active": is_active})
            .eq("id", image_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update library image")
        return _parse_image(response.data[0])


def _parse_image(row: dict[str, object]) -> LibraryImage:
    """Parse a library row into a domain model."""
    raw_categories = row.get("style_category_ids") or []
    return LibraryImage(
        id=str(row["id"]),
        url=str(row.get("url", "")),
        room_type=str(row.get("room_type", "")),
        style_categories=frozenset(str(value) for value in raw_categories),
        is_active=row.get("is_active") is not False,
    )

"""Services for the studio image library."""

from dataclasses import dataclass
from typing import Protocol

from style_discovery.domain.models import LibraryImage
from style_discovery.services.sampler import Sampler


class LibraryRepository(Protocol):
    """Persistence interface for library images."""

    def list_images(self) -> list[LibraryImage]:
        """Return every image in the library."""

    def set_active(self, image_id: str, is_active: bool) -> LibraryImage:
        """Toggle whether an image can be sampled."""


@dataclass(frozen=True)
class PoolReadiness:
    """Whether the active pool is large enough to start discovery."""

    pool_size: int
    min_required: int

    @property
    def is_ready(self) -> bool:
        return self.pool_size >= self.min_required

    @property
    def remaining(self) -> int:
        return max(0, self.min_required - self.pool_size)

    @property
    def fraction(self) -> float:
        if self.min_required <= 0:
            return 1.0
        return min(1.0, self.pool_size / self.min_required)


@dataclass
class LibraryService:
    """Application service for library operations."""

    repository: LibraryRepository

    def list_images(self) -> list[LibraryImage]:
        """Return all images, active or not."""
        return self.repository.list_images()

    def active_pool(self) -> list[LibraryImage]:
        """Return images eligible for sampling."""
        return Sampler.eligible(self.repository.list_images())

    def set_active(self, image_id: str, is_active: bool) -> LibraryImage:
        """Include or exclude an image from future sessions."""
        return self.repository.set_active(image_id, is_active)

    def readiness(self, min_required: int) -> PoolReadiness:
        """Report pool size against the configured minimum."""
        return PoolReadiness(
            pool_size=len(self.active_pool()), min_required=min_required
        )

"""Shared test fixtures."""

import random
from dataclasses import dataclass, field, replace
from uuid import UUID, uuid4

import pytest

from style_discovery.config import Settings
from style_discovery.containers import AppContainer
from style_discovery.domain.models import LibraryImage, StyleCategory
from style_discovery.domain.scoring import SessionResult
from style_discovery.domain.settings import DEFAULT_CATEGORIES, StudioSettings
from style_discovery.services.discovery import DiscoveryService
from style_discovery.services.history import HistoryService, SessionResultRepository
from style_discovery.services.library import LibraryRepository, LibraryService
from style_discovery.services.sampler import Sampler
from style_discovery.services.studio_settings import (
    StudioSettingsRepository,
    StudioSettingsService,
)

ROOM_TYPES = ("Living Room", "Bedroom", "Kitchen")


def make_image(
    index: int,
    room_type: str | None = None,
    categories: tuple[str, ...] = ("1",),
    is_active: bool = True,
) -> LibraryImage:
    """Build a library image with predictable fields."""
    return LibraryImage(
        id=f"img-{index}",
        url=f"https://cdn.example.com/img-{index}.jpg",
        room_type=room_type or ROOM_TYPES[index % len(ROOM_TYPES)],
        style_categories=frozenset(categories),
        is_active=is_active,
    )


@dataclass
class FakeClock:
    """Monotonic clock that only moves when told to."""

    now: float = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class InMemoryLibraryRepository(LibraryRepository):
    """In-memory library repository for tests."""

    images: list[LibraryImage] = field(default_factory=list)

    def list_images(self) -> list[LibraryImage]:
        return list(self.images)

    def set_active(self, image_id: str, is_active: bool) -> LibraryImage:
        for index, image in enumerate(self.images):
            if image.id == image_id:
                self.images[index] = replace(image, is_active=is_active)
                return self.images[index]
        raise RuntimeError("Failed to update library image")


@dataclass
class InMemoryStudioSettingsRepository(StudioSettingsRepository):
    """In-memory studio settings repository for tests."""

    settings: StudioSettings | None = None
    categories: list[StyleCategory] = field(
        default_factory=lambda: list(DEFAULT_CATEGORIES)
    )

    def get_settings(self) -> StudioSettings | None:
        return self.settings

    def list_categories(self) -> list[StyleCategory]:
        return list(self.categories)


@dataclass
class InMemorySessionResultRepository(SessionResultRepository):
    """In-memory session history for tests."""

    results: list[SessionResult] = field(default_factory=list)

    def save_result(self, result: SessionResult) -> None:
        self.results.append(result)

    def list_results(self, limit: int) -> list[SessionResult]:
        return sorted(self.results, key=lambda item: item.date, reverse=True)[:limit]

    def get_result(self, result_id: UUID) -> SessionResult | None:
        for result in self.results:
            if result.id == result_id:
                return result
        return None


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service.role.key",
        admin_token="admin-token",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def library_repository() -> InMemoryLibraryRepository:
    return InMemoryLibraryRepository(images=[make_image(i) for i in range(6)])


@pytest.fixture
def studio_settings_repository() -> InMemoryStudioSettingsRepository:
    return InMemoryStudioSettingsRepository(
        settings=StudioSettings(client_name="Avery", session_length=5)
    )


@pytest.fixture
def session_result_repository() -> InMemorySessionResultRepository:
    return InMemorySessionResultRepository()


@pytest.fixture
def discovery_service(
    library_repository: InMemoryLibraryRepository,
    studio_settings_repository: InMemoryStudioSettingsRepository,
    session_result_repository: InMemorySessionResultRepository,
    clock: FakeClock,
) -> DiscoveryService:
    return DiscoveryService(
        library_service=LibraryService(library_repository),
        settings_service=StudioSettingsService(studio_settings_repository),
        history_service=HistoryService(session_result_repository),
        sampler=Sampler(random.Random(7)),
        clock=clock,
        id_factory=uuid4,
    )


@pytest.fixture
def container(settings: Settings, discovery_service: DiscoveryService) -> AppContainer:
    return AppContainer(
        settings=settings,
        library_service=discovery_service.library_service,
        studio_settings_service=discovery_service.settings_service,
        history_service=discovery_service.history_service,
        discovery_service=discovery_service,
    )

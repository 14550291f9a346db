"""Dependency container wiring for the application."""

import random
from dataclasses import dataclass

from supabase import create_client

from style_discovery.adapters.supabase_library_repository import (
    SupabaseLibraryRepository,
)
from style_discovery.adapters.supabase_session_result_repository import (
    SupabaseSessionResultRepository,
)
from style_discovery.adapters.supabase_studio_settings_repository import (
    SupabaseStudioSettingsRepository,
)
from style_discovery.config import Settings
from style_discovery.services.discovery import DiscoveryService
from style_discovery.services.history import HistoryService
from style_discovery.services.library import LibraryService
from style_discovery.services.sampler import Sampler
from style_discovery.services.studio_settings import StudioSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    library_service: LibraryService
    studio_settings_service: StudioSettingsService
    history_service: HistoryService
    discovery_service: DiscoveryService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    library_service = LibraryService(SupabaseLibraryRepository(supabase_client))
    studio_settings_service = StudioSettingsService(
        SupabaseStudioSettingsRepository(supabase_client),
        defaults=resolved_settings.studio_defaults(),
    )
    history_service = HistoryService(SupabaseSessionResultRepository(supabase_client))
    discovery_service = DiscoveryService(
        library_service=library_service,
        settings_service=studio_settings_service,
        history_service=history_service,
        sampler=Sampler(random.Random(resolved_settings.sampler_seed)),
    )

    return AppContainer(
        settings=resolved_settings,
        library_service=library_service,
        studio_settings_service=studio_settings_service,
        history_service=history_service,
        discovery_service=discovery_service,
    )

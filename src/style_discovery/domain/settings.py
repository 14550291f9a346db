"""Domain models for studio settings."""

from dataclasses import dataclass

from style_discovery.domain.models import StyleCategory

MIN_SESSION_LENGTH = 5
MAX_SESSION_LENGTH = 40
DEFAULT_SESSION_LENGTH = 30
MIN_LIBRARY_SIZE = 5
DEFAULT_STANDOUT_COUNT = 3

DEFAULT_ROOM_TYPES: tuple[str, ...] = (
    "Living Room",
    "Bedroom",
    "Kitchen",
    "Bathroom",
    "Dining",
    "Home Office",
)

DEFAULT_CATEGORIES: tuple[StyleCategory, ...] = (
    StyleCategory(id="1", name="Minimalist"),
    StyleCategory(id="2", name="Scandinavian"),
    StyleCategory(id="3", name="Japandi"),
    StyleCategory(id="4", name="Timeless Classic"),
    StyleCategory(id="5", name="Contemporary Modern"),
    StyleCategory(id="6", name="Vintage"),
    StyleCategory(id="7", name="Industrial"),
    StyleCategory(id="8", name="Bohemian"),
    StyleCategory(id="9", name="Decorative"),
    StyleCategory(id="10", name="Luxury Glamour"),
)


@dataclass(frozen=True)
class StudioSettings:
    """Studio-level preferences used to configure a discovery session."""

    client_name: str | None = None
    session_length: int = DEFAULT_SESSION_LENGTH
    min_required_images: int = MIN_LIBRARY_SIZE
    standout_count: int = DEFAULT_STANDOUT_COUNT


def clamp_session_length(value: int) -> int:
    """Clamp a session length into the supported range."""
    return max(MIN_SESSION_LENGTH, min(MAX_SESSION_LENGTH, int(value)))

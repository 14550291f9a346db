"""Domain models for discovery sessions."""

from dataclasses import dataclass
from enum import StrEnum


class SwipeDirection(StrEnum):
    """Outcome of a single swipe."""

    PREFER = "right"
    REJECT = "left"

    @classmethod
    def parse(cls, raw: str) -> "SwipeDirection":
        """Parse a direction from either its wire value or its name."""
        value = raw.strip().lower()
        if value in {"right", "prefer"}:
            return cls.PREFER
        if value in {"left", "reject"}:
            return cls.REJECT
        raise ValueError(f"Unknown swipe direction: {raw!r}")


@dataclass(frozen=True)
class StyleCategory:
    """Named style category from the studio catalog."""

    id: str
    name: str


@dataclass(frozen=True)
class LibraryImage:
    """Reference image from the studio library."""

    id: str
    url: str
    room_type: str
    style_categories: frozenset[str] = frozenset()
    is_active: bool = True


@dataclass(frozen=True)
class SwipeDecision:
    """One timed swipe outcome, captured by value at swipe time."""

    image_id: str
    direction: SwipeDirection
    response_time_ms: int
    undo_used: bool
    room_type: str
    style_categories: frozenset[str]

    @property
    def preferred(self) -> bool:
        return self.direction is SwipeDirection.PREFER

"""Domain models for preference scoring results."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from style_discovery.domain.models import SwipeDecision


@dataclass(frozen=True)
class AffinityScore:
    """Normalized preference strength for a style category or room type."""

    key: str
    label: str
    affinity: float
    observations: int
    preferred: int
    rejected: int


@dataclass(frozen=True)
class ScoringSummary:
    """Ranked affinities and totals distilled from a decision ledger."""

    total_decisions: int = 0
    preferred_count: int = 0
    rejected_count: int = 0
    average_response_time_ms: float = 0.0
    corrected_count: int = 0
    uncategorized_count: int = 0
    category_affinities: tuple[AffinityScore, ...] = ()
    room_affinities: tuple[AffinityScore, ...] = ()
    standout_categories: tuple[AffinityScore, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.total_decisions == 0


@dataclass(frozen=True)
class SessionResult:
    """Completed discovery session handed to the history collaborator."""

    id: UUID
    date: datetime
    decisions: tuple[SwipeDecision, ...]
    summary: ScoringSummary = field(default_factory=ScoringSummary)
    client_name: str | None = None

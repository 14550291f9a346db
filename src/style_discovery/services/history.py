"""Session history and cross-session analytics."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from style_discovery.domain.scoring import SessionResult


class SessionResultRepository(Protocol):
    """Persistence interface for completed sessions."""

    def save_result(self, result: SessionResult) -> None:
        """Persist a completed session."""

    def list_results(self, limit: int) -> list[SessionResult]:
        """Return recent sessions, newest first."""

    def get_result(self, result_id: UUID) -> SessionResult | None:
        """Return a session by id, if present."""


@dataclass(frozen=True)
class CategoryTrend:
    """Average affinity for a category across sessions."""

    key: str
    label: str
    mean_affinity: float
    sessions: int


@dataclass
class HistoryService:
    """Service for reading back completed sessions."""

    repository: SessionResultRepository

    def record(self, result: SessionResult) -> None:
        """Persist a completed session."""
        self.repository.save_result(result)

    def recent(self, limit: int = 20) -> list[SessionResult]:
        """Return recent sessions."""
        return self.repository.list_results(limit)

    def get(self, result_id: UUID) -> SessionResult | None:
        """Return a single session."""
        return self.repository.get_result(result_id)

    def category_trends(self, limit: int = 50) -> list[CategoryTrend]:
        """Average each category's affinity over the sessions that observed it."""
        totals: dict[str, tuple[str, float, int]] = {}
        for result in self.repository.list_results(limit):
            for score in result.summary.category_affinities:
                label, total, count = totals.get(score.key, (score.label, 0.0, 0))
                totals[score.key] = (label, total + score.affinity, count + 1)
        trends = [
            CategoryTrend(
                key=key, label=label, mean_affinity=total / count, sessions=count
            )
            for key, (label, total, count) in totals.items()
        ]
        return sorted(trends, key=lambda trend: trend.mean_affinity, reverse=True)

"""Pydantic models for the discovery API."""

from uuid import UUID

from pydantic import BaseModel, field_validator

from style_discovery.domain.models import LibraryImage, SwipeDecision, SwipeDirection
from style_discovery.domain.scoring import AffinityScore, ScoringSummary, SessionResult
from style_discovery.services.library import PoolReadiness
from style_discovery.services.session_machine import Progress


class StartRequest(BaseModel):
    """Request to begin a discovery session."""

    client_name: str | None = None


class SwipeRequest(BaseModel):
    """A swipe from the presentation layer."""

    direction: SwipeDirection

    @field_validator("direction", mode="before")
    @classmethod
    def _parse_direction(cls, value: object) -> object:
        if isinstance(value, str):
            return SwipeDirection.parse(value)
        return value


class ActiveToggleRequest(BaseModel):
    """Admin request to include or exclude a library image."""

    is_active: bool


class ImageView(BaseModel):
    """Image presented to the participant."""

    id: str
    url: str
    room_type: str
    style_categories: list[str]
    is_active: bool = True

    @classmethod
    def from_image(cls, image: LibraryImage) -> "ImageView":
        return cls(
            id=image.id,
            url=image.url,
            room_type=image.room_type,
            style_categories=sorted(image.style_categories),
            is_active=image.is_active,
        )


class ProgressView(BaseModel):
    """Session progress."""

    position: int
    total: int
    fraction: float

    @classmethod
    def from_progress(cls, progress: Progress) -> "ProgressView":
        return cls(
            position=progress.position,
            total=progress.total,
            fraction=progress.fraction,
        )


class ReadinessView(BaseModel):
    """Library readiness for discovery."""

    pool_size: int
    min_required: int
    remaining: int
    is_ready: bool

    @classmethod
    def from_readiness(cls, readiness: PoolReadiness) -> "ReadinessView":
        return cls(
            pool_size=readiness.pool_size,
            min_required=readiness.min_required,
            remaining=readiness.remaining,
            is_ready=readiness.is_ready,
        )


class AffinityView(BaseModel):
    """Ranked affinity entry."""

    key: str
    label: str
    affinity: float
    observations: int
    preferred: int
    rejected: int

    @classmethod
    def from_score(cls, score: AffinityScore) -> "AffinityView":
        return cls(
            key=score.key,
            label=score.label,
            affinity=score.affinity,
            observations=score.observations,
            preferred=score.preferred,
            rejected=score.rejected,
        )


class SummaryView(BaseModel):
    """Scoring summary for rendering."""

    total_decisions: int
    preferred_count: int
    rejected_count: int
    average_response_time_ms: float
    corrected_count: int
    uncategorized_count: int
    category_affinities: list[AffinityView]
    room_affinities: list[AffinityView]
    standout_categories: list[AffinityView]

    @classmethod
    def from_summary(cls, summary: ScoringSummary) -> "SummaryView":
        return cls(
            total_decisions=summary.total_decisions,
            preferred_count=summary.preferred_count,
            rejected_count=summary.rejected_count,
            average_response_time_ms=summary.average_response_time_ms,
            corrected_count=summary.corrected_count,
            uncategorized_count=summary.uncategorized_count,
            category_affinities=[
                AffinityView.from_score(s) for s in summary.category_affinities
            ],
            room_affinities=[AffinityView.from_score(s) for s in summary.room_affinities],
            standout_categories=[
                AffinityView.from_score(s) for s in summary.standout_categories
            ],
        )


class DecisionView(BaseModel):
    """Recorded swipe decision."""

    image_id: str
    direction: SwipeDirection
    response_time_ms: int
    undo_used: bool
    room_type: str
    style_categories: list[str]

    @classmethod
    def from_decision(cls, decision: SwipeDecision) -> "DecisionView":
        return cls(
            image_id=decision.image_id,
            direction=decision.direction,
            response_time_ms=decision.response_time_ms,
            undo_used=decision.undo_used,
            room_type=decision.room_type,
            style_categories=sorted(decision.style_categories),
        )


class SessionResultView(BaseModel):
    """Completed session."""

    id: UUID
    date: str
    client_name: str | None
    decisions: list[DecisionView]
    summary: SummaryView

    @classmethod
    def from_result(cls, result: SessionResult) -> "SessionResultView":
        return cls(
            id=result.id,
            date=result.date.isoformat(),
            client_name=result.client_name,
            decisions=[DecisionView.from_decision(d) for d in result.decisions],
            summary=SummaryView.from_summary(result.summary),
        )


class TransitionView(BaseModel):
    """Outcome of a start, swipe, undo, or cancel request."""

    accepted: bool
    state: str
    reason: str | None = None
    current_image: ImageView | None = None
    progress: ProgressView | None = None
    can_undo: bool = False
    result: SessionResultView | None = None

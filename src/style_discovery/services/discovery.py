"""Orchestrates sampling, the session state machine, scoring, and persistence."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from style_discovery.domain.errors import (
    InsufficientPoolError,
    SessionAlreadyActiveError,
)
from style_discovery.domain.models import StyleCategory, SwipeDecision, SwipeDirection
from style_discovery.domain.scoring import SessionResult
from style_discovery.services.history import HistoryService
from style_discovery.services.library import LibraryService, PoolReadiness
from style_discovery.services.sampler import Sampler
from style_discovery.services.scoring import ConfidenceWeighting, analyze_session
from style_discovery.services.session_machine import (
    SessionMachine,
    SessionState,
    Transition,
)
from style_discovery.services.studio_settings import StudioSettingsService

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class DiscoveryService:
    """Runs one discovery session at a time for the presentation layer."""

    library_service: LibraryService
    settings_service: StudioSettingsService
    history_service: HistoryService
    sampler: Sampler = field(default_factory=Sampler)
    clock: Callable[[], float] = time.monotonic
    id_factory: Callable[[], UUID] = uuid4
    now: Callable[[], datetime] = _utc_now
    weighting: ConfidenceWeighting | None = None
    on_complete: Callable[[SessionResult], None] | None = None
    last_result: SessionResult | None = field(default=None, init=False)
    _machine: SessionMachine | None = field(default=None, init=False)
    _client_name: str | None = field(default=None, init=False)
    _categories: list[StyleCategory] = field(default_factory=list, init=False)
    _standout_count: int = field(default=0, init=False)

    @property
    def active_session(self) -> SessionMachine | None:
        """Return the run awaiting decisions, if any."""
        return self._machine

    def readiness(self) -> PoolReadiness:
        """Report whether the library can support a session."""
        settings = self.settings_service.get_settings()
        return self.library_service.readiness(settings.min_required_images)

    def start_session(self, client_name: str | None = None) -> SessionMachine:
        """Sample the library and begin a new run."""
        if self._machine is not None:
            raise SessionAlreadyActiveError("A discovery session is already running")

        settings = self.settings_service.get_settings()
        pool = self.library_service.active_pool()
        if len(pool) < settings.min_required_images:
            raise InsufficientPoolError(len(pool), settings.min_required_images)
        sequence = self.sampler.sample(pool, settings.session_length)
        if not sequence:
            raise InsufficientPoolError(0, settings.min_required_images)

        self._categories = self.settings_service.get_categories()
        self._standout_count = settings.standout_count
        self._client_name = client_name or settings.client_name
        machine = SessionMachine(clock=self.clock, on_complete=self._complete)
        machine.start(sequence)
        self._machine = machine
        logger.info(
            "Discovery session started",
            extra={"images": len(sequence), "pool_size": len(pool)},
        )
        return machine

    def swipe(self, direction: SwipeDirection) -> Transition:
        """Record a decision on the current image."""
        if self._machine is None:
            return _no_session()
        return self._machine.swipe(direction)

    def undo(self) -> Transition:
        """Withdraw the latest decision."""
        if self._machine is None:
            return _no_session()
        return self._machine.undo()

    def cancel(self) -> Transition:
        """Abandon the current run without persisting anything."""
        if self._machine is None:
            return _no_session()
        transition = self._machine.cancel()
        if transition.accepted:
            self._machine = None
            logger.info("Discovery session cancelled")
        return transition

    def _complete(self, ledger: tuple[SwipeDecision, ...]) -> None:
        self._machine = None
        summary = analyze_session(
            ledger,
            self._categories,
            weighting=self.weighting,
            standout_count=self._standout_count,
        )
        result = SessionResult(
            id=self.id_factory(),
            date=self.now(),
            client_name=self._client_name,
            decisions=ledger,
            summary=summary,
        )
        self.last_result = result
        try:
            self.history_service.record(result)
        except Exception:
            logger.exception(
                "Failed to persist session result", extra={"result_id": result.id}
            )
            raise
        logger.info(
            "Discovery session completed",
            extra={
                "result_id": result.id,
                "preferred": summary.preferred_count,
                "rejected": summary.rejected_count,
            },
        )
        if self.on_complete is not None:
            self.on_complete(result)


def _no_session() -> Transition:
    return Transition(
        accepted=False, state=SessionState.IDLE, reason="no active session"
    )

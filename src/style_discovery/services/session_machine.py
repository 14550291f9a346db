"""Session state machine for a single discovery run."""

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from style_discovery.domain.errors import InsufficientPoolError
from style_discovery.domain.models import LibraryImage, SwipeDecision, SwipeDirection

logger = logging.getLogger(__name__)


class SessionState(StrEnum):
    """Lifecycle of a discovery run."""

    IDLE = "IDLE"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class UndoState(StrEnum):
    """Single-level undo bookkeeping.

    ``UNDO_AVAILABLE`` follows every swipe. ``CORRECTION_PENDING`` follows an
    undo and lasts until the re-presented image is decided again, which both
    blocks a second undo and marks that decision as corrected.
    """

    NO_UNDO_PENDING = "NO_UNDO_PENDING"
    UNDO_AVAILABLE = "UNDO_AVAILABLE"
    CORRECTION_PENDING = "CORRECTION_PENDING"


@dataclass(frozen=True)
class Progress:
    """Position of the participant within the sampled sequence."""

    position: int
    total: int

    @property
    def fraction(self) -> float:
        if self.total == 0:
            return 0.0
        return self.position / self.total


@dataclass(frozen=True)
class Transition:
    """Outcome of a state machine operation.

    Rejected transitions are no-ops and carry a short reason instead of
    raising, since duplicate taps from the presentation layer are expected.
    """

    accepted: bool
    state: SessionState
    decision: SwipeDecision | None = None
    reason: str | None = None


CompletionHandler = Callable[[tuple[SwipeDecision, ...]], None]


@dataclass
class SessionMachine:
    """Owns the sampled sequence, the decision ledger, and undo availability."""

    clock: Callable[[], float] = time.monotonic
    on_complete: CompletionHandler | None = None
    _state: SessionState = field(default=SessionState.IDLE, init=False)
    _sequence: tuple[LibraryImage, ...] = field(default=(), init=False)
    _ledger: list[SwipeDecision] = field(default_factory=list, init=False)
    _undo_state: UndoState = field(default=UndoState.NO_UNDO_PENDING, init=False)
    _last_decision_at: float = field(default=0.0, init=False)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def undo_state(self) -> UndoState:
        return self._undo_state

    @property
    def current_index(self) -> int:
        return len(self._ledger)

    @property
    def sequence(self) -> tuple[LibraryImage, ...]:
        return self._sequence

    @property
    def ledger(self) -> tuple[SwipeDecision, ...]:
        return tuple(self._ledger)

    @property
    def current_image(self) -> LibraryImage | None:
        """Return the image awaiting a decision, if any."""
        if self._state is not SessionState.IN_PROGRESS:
            return None
        return self._sequence[self.current_index]

    @property
    def progress(self) -> Progress:
        return Progress(position=self.current_index, total=len(self._sequence))

    @property
    def can_undo(self) -> bool:
        return (
            self._state is SessionState.IN_PROGRESS
            and self._undo_state is UndoState.UNDO_AVAILABLE
            and self.current_index > 0
        )

    def start(self, sequence: Sequence[LibraryImage]) -> Transition:
        """Begin presenting a sampled sequence."""
        if self._state is not SessionState.IDLE:
            return self._reject("session already started")
        if not sequence:
            raise InsufficientPoolError(pool_size=0, min_required=1)
        self._sequence = tuple(sequence)
        self._ledger = []
        self._undo_state = UndoState.NO_UNDO_PENDING
        self._last_decision_at = self.clock()
        self._state = SessionState.IN_PROGRESS
        return Transition(accepted=True, state=self._state)

    def swipe(self, direction: SwipeDirection) -> Transition:
        """Record a decision for the current image and advance."""
        if self._state is not SessionState.IN_PROGRESS:
            return self._reject(f"cannot swipe while {self._state}")
        image = self._sequence[self.current_index]
        now = self.clock()
        decision = SwipeDecision(
            image_id=image.id,
            direction=direction,
            response_time_ms=max(0, round((now - self._last_decision_at) * 1000)),
            undo_used=self._undo_state is UndoState.CORRECTION_PENDING,
            room_type=image.room_type,
            style_categories=frozenset(image.style_categories),
        )
        self._ledger.append(decision)
        self._undo_state = UndoState.UNDO_AVAILABLE

        if self.current_index == len(self._sequence):
            self._state = SessionState.COMPLETED
            if self.on_complete is not None:
                self.on_complete(self.ledger)
        else:
            self._last_decision_at = now
        return Transition(accepted=True, state=self._state, decision=decision)

    def undo(self) -> Transition:
        """Withdraw the most recent decision and re-present its image."""
        if not self.can_undo:
            return self._reject("nothing to undo")
        removed = self._ledger.pop()
        self._undo_state = UndoState.CORRECTION_PENDING
        self._last_decision_at = self.clock()
        return Transition(accepted=True, state=self._state, decision=removed)

    def cancel(self) -> Transition:
        """Abandon the run without emitting a result."""
        if self._state is not SessionState.IN_PROGRESS:
            return self._reject(f"cannot cancel while {self._state}")
        self._ledger = []
        self._undo_state = UndoState.NO_UNDO_PENDING
        self._state = SessionState.CANCELLED
        return Transition(accepted=True, state=self._state)

    def _reject(self, reason: str) -> Transition:
        logger.debug("Rejected session transition: %s", reason)
        return Transition(accepted=False, state=self._state, reason=reason)

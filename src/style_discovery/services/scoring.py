"""Preference scoring for completed discovery sessions."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from style_discovery.domain.models import StyleCategory, SwipeDecision
from style_discovery.domain.scoring import AffinityScore, ScoringSummary
from style_discovery.domain.settings import DEFAULT_ROOM_TYPES, DEFAULT_STANDOUT_COUNT


@dataclass(frozen=True)
class ConfidenceWeighting:
    """Maps a decision's response time and undo flag to a weight in (0, 1].

    Responses up to ``fast_ms`` count fully, responses from ``slow_ms`` on
    count at ``floor``, and the weight falls linearly in between. A decision
    made after an undo is scaled by ``undo_penalty``.
    """

    fast_ms: int = 1500
    slow_ms: int = 8000
    floor: float = 0.25
    undo_penalty: float = 0.5

    def __post_init__(self) -> None:
        if self.fast_ms < 0 or self.slow_ms <= self.fast_ms:
            raise ValueError("slow_ms must be greater than fast_ms >= 0")
        if not 0 < self.floor <= 1:
            raise ValueError("floor must be in (0, 1]")
        if not 0 < self.undo_penalty <= 1:
            raise ValueError("undo_penalty must be in (0, 1]")

    def response_weight(self, response_time_ms: int) -> float:
        """Return the confidence for a response time alone."""
        if response_time_ms <= self.fast_ms:
            return 1.0
        if response_time_ms >= self.slow_ms:
            return self.floor
        span = self.slow_ms - self.fast_ms
        elapsed = response_time_ms - self.fast_ms
        return 1.0 - (1.0 - self.floor) * (elapsed / span)

    def weight(self, decision: SwipeDecision) -> float:
        """Return the confidence multiplier for a decision."""
        confidence = self.response_weight(decision.response_time_ms)
        if decision.undo_used:
            confidence *= self.undo_penalty
        return confidence


DEFAULT_WEIGHTING = ConfidenceWeighting()


@dataclass
class _Tally:
    weighted_sum: float = 0.0
    observations: int = 0
    preferred: int = 0
    rejected: int = 0

    def add(self, decision: SwipeDecision, weight: float) -> None:
        self.observations += 1
        if decision.preferred:
            self.preferred += 1
            self.weighted_sum += weight
        else:
            self.rejected += 1
            self.weighted_sum -= weight

    @property
    def affinity(self) -> float:
        return max(-1.0, min(1.0, self.weighted_sum / self.observations))


@dataclass
class _Aggregation:
    tallies: dict[str, _Tally] = field(default_factory=dict)

    def add(self, key: str, decision: SwipeDecision, weight: float) -> None:
        self.tallies.setdefault(key, _Tally()).add(decision, weight)

    def ranked(
        self, order: Sequence[str], label: Callable[[str], str]
    ) -> tuple[AffinityScore, ...]:
        unique = list(dict.fromkeys(order))
        position = {key: index for index, key in enumerate(unique)}
        keys = [key for key in unique if key in self.tallies]
        keys.sort(key=lambda key: (-self.tallies[key].affinity, position[key]))
        return tuple(
            AffinityScore(
                key=key,
                label=label(key),
                affinity=self.tallies[key].affinity,
                observations=self.tallies[key].observations,
                preferred=self.tallies[key].preferred,
                rejected=self.tallies[key].rejected,
            )
            for key in keys
        )


def analyze_session(
    ledger: Iterable[SwipeDecision],
    categories: Sequence[StyleCategory],
    *,
    room_types: Sequence[str] | None = None,
    weighting: ConfidenceWeighting | None = None,
    standout_count: int = DEFAULT_STANDOUT_COUNT,
) -> ScoringSummary:
    """Distill a decision ledger into ranked style and room affinities.

    Categories are ranked by affinity with ties resolved by catalog order.
    Category ids missing from the catalog are left out of the rankings, as are
    categories no decision touched.
    """
    decisions = list(ledger)
    if not decisions:
        return ScoringSummary()

    weights = weighting or DEFAULT_WEIGHTING
    by_category = _Aggregation()
    by_room = _Aggregation()
    catalog = {category.id: category.name for category in categories}
    uncategorized = 0

    for decision in decisions:
        weight = weights.weight(decision)
        if not decision.style_categories:
            uncategorized += 1
        for category_id in decision.style_categories:
            if category_id in catalog:
                by_category.add(category_id, decision, weight)
        by_room.add(decision.room_type, decision, weight)

    category_ranking = by_category.ranked(
        [category.id for category in categories], catalog.__getitem__
    )
    room_ranking = by_room.ranked(
        _room_order(room_types or DEFAULT_ROOM_TYPES, decisions), str
    )
    preferred = sum(1 for decision in decisions if decision.preferred)
    total_response = sum(decision.response_time_ms for decision in decisions)

    return ScoringSummary(
        total_decisions=len(decisions),
        preferred_count=preferred,
        rejected_count=len(decisions) - preferred,
        average_response_time_ms=total_response / len(decisions),
        corrected_count=sum(1 for decision in decisions if decision.undo_used),
        uncategorized_count=uncategorized,
        category_affinities=category_ranking,
        room_affinities=room_ranking,
        standout_categories=category_ranking[: max(standout_count, 0)],
    )


def _room_order(catalog: Sequence[str], decisions: list[SwipeDecision]) -> list[str]:
    """Return catalog room types followed by unlisted ones in ledger order."""
    order = list(dict.fromkeys(catalog))
    known = set(order)
    for decision in decisions:
        if decision.room_type not in known:
            known.add(decision.room_type)
            order.append(decision.room_type)
    return order

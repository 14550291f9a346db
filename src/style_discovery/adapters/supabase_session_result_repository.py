"""Supabase-backed repository for completed discovery sessions."""

from dataclasses import asdict, dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from style_discovery.domain.models import SwipeDecision, SwipeDirection
from style_discovery.domain.scoring import AffinityScore, ScoringSummary, SessionResult
from style_discovery.services.history import SessionResultRepository

_COLUMNS = "id, created_at, client_name, decisions_json, summary_json"


@dataclass
class SupabaseSessionResultRepository(SessionResultRepository):
    """Supabase implementation for session history."""

    client: Client

    def save_result(self, result: SessionResult) -> None:
        """Insert a completed session row."""
        response = (
            self.client.table("discovery_sessions")
            .insert(
                {
                    "id": str(result.id),
                    "created_at": result.date.isoformat(),
                    "client_name": result.client_name,
                    "decisions_json": [
                        _decision_row(decision) for decision in result.decisions
                    ],
                    "summary_json": _summary_row(result.summary),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save discovery session")

    def list_results(self, limit: int) -> list[SessionResult]:
        """Return recent sessions, newest first."""
        response = (
            self.client.table("discovery_sessions")
            .select(_COLUMNS)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_result(row) for row in response.data or []]

    def get_result(self, result_id: UUID) -> SessionResult | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("discovery_sessions")
            .select(_COLUMNS)
            .eq("id", str(result_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_result(response.data[0])


def _decision_row(decision: SwipeDecision) -> dict[str, object]:
    return {
        "image_id": decision.image_id,
        "direction": decision.direction.value,
        "response_time_ms": decision.response_time_ms,
        "undo_used": decision.undo_used,
        "room_type": decision.room_type,
        "style_categories": sorted(decision.style_categories),
    }


def _summary_row(summary: ScoringSummary) -> dict[str, object]:
    row = asdict(summary)
    for key in ("category_affinities", "room_affinities", "standout_categories"):
        row[key] = list(row[key])
    return row


def _parse_decision(row: dict[str, object]) -> SwipeDecision:
    return SwipeDecision(
        image_id=str(row["image_id"]),
        direction=SwipeDirection.parse(str(row["direction"])),
        response_time_ms=int(row.get("response_time_ms", 0)),
        undo_used=bool(row.get("undo_used", False)),
        room_type=str(row.get("room_type", "")),
        style_categories=frozenset(
            str(v) for v in row.get("style_categories") or []
        ),
    )


def _parse_scores(rows: object) -> tuple[AffinityScore, ...]:
    if not isinstance(rows, list):
        return ()
    return tuple(AffinityScore(**row) for row in rows if isinstance(row, dict))


def _parse_summary(row: dict[str, object] | None) -> ScoringSummary:
    if not row:
        return ScoringSummary()
    return ScoringSummary(
        total_decisions=int(row.get("total_decisions", 0)),
        preferred_count=int(row.get("preferred_count", 0)),
        rejected_count=int(row.get("rejected_count", 0)),
        average_response_time_ms=float(row.get("average_response_time_ms", 0.0)),
        corrected_count=int(row.get("corrected_count", 0)),
        uncategorized_count=int(row.get("uncategorized_count", 0)),
        category_affinities=_parse_scores(row.get("category_affinities")),
        room_affinities=_parse_scores(row.get("room_affinities")),
        standout_categories=_parse_scores(row.get("standout_categories")),
    )


def _parse_result(row: dict[str, object]) -> SessionResult:
    """Parse a session row into a domain model."""
    decisions = row.get("decisions_json") or []
    return SessionResult(
        id=UUID(str(row["id"])),
        date=datetime.fromisoformat(str(row["created_at"])),
        client_name=row.get("client_name"),
        decisions=tuple(_parse_decision(item) for item in decisions),
        summary=_parse_summary(row.get("summary_json")),
    )

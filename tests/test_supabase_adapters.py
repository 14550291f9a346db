"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from style_discovery.adapters.supabase_library_repository import (
    SupabaseLibraryRepository,
)
from style_discovery.adapters.supabase_session_result_repository import (
    SupabaseSessionResultRepository,
)
from style_discovery.adapters.supabase_studio_settings_repository import (
    SupabaseStudioSettingsRepository,
)
from style_discovery.domain.models import StyleCategory, SwipeDecision, SwipeDirection
from style_discovery.domain.scoring import AffinityScore, ScoringSummary, SessionResult


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_library_repository_parses_rows() -> None:
    client = FakeSupabaseClient()
    client.table("library_images").queue(
        "select",
        [
            {
                "id": "img-1",
                "url": "https://cdn.example.com/1.jpg",
                "room_type": "Kitchen",
                "style_category_ids": ["1", "3"],
                "is_active": True,
            },
            {
                "id": "img-2",
                "url": "https://cdn.example.com/2.jpg",
                "room_type": "Bedroom",
                "style_category_ids": None,
                "is_active": None,
            },
        ],
    )

    images = SupabaseLibraryRepository(client).list_images()

    assert images[0].style_categories == frozenset({"1", "3"})
    assert images[1].style_categories == frozenset()
    assert images[1].is_active


def test_supabase_studio_settings_repository() -> None:
    client = FakeSupabaseClient()
    client.table("studio_settings").queue(
        "select",
        [
            {
                "client_name": "Avery",
                "session_length": 12,
                "min_required_images": 8,
                "standout_count": None,
            }
        ],
    )
    client.table("style_categories").queue(
        "select", [{"id": 1, "name": "Minimalist"}, {"id": 2, "name": "Japandi"}]
    )
    repository = SupabaseStudioSettingsRepository(client)

    settings = repository.get_settings()
    categories = repository.list_categories()

    assert settings is not None
    assert settings.session_length == 12
    assert settings.min_required_images == 8
    assert settings.standout_count == 3
    assert categories == [
        StyleCategory(id="1", name="Minimalist"),
        StyleCategory(id="2", name="Japandi"),
    ]
    assert repository.get_settings() is None


def _session_result() -> SessionResult:
    score = AffinityScore(
        key="1",
        label="Minimalist",
        affinity=0.5,
        observations=2,
        preferred=1,
        rejected=1,
    )
    return SessionResult(
        id=uuid4(),
        date=datetime(2024, 3, 2, 10, 30, tzinfo=UTC),
        client_name="Avery",
        decisions=(
            SwipeDecision(
                image_id="img-1",
                direction=SwipeDirection.PREFER,
                response_time_ms=900,
                undo_used=False,
                room_type="Kitchen",
                style_categories=frozenset({"1"}),
            ),
        ),
        summary=ScoringSummary(
            total_decisions=1,
            preferred_count=1,
            average_response_time_ms=900.0,
            category_affinities=(score,),
            standout_categories=(score,),
        ),
    )


def test_supabase_session_result_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("discovery_sessions")
    result = _session_result()
    table.queue("insert", [{"id": str(result.id)}])
    repository = SupabaseSessionResultRepository(client)

    repository.save_result(result)
    payload = table.last_payload
    assert isinstance(payload, dict)
    assert payload["decisions_json"][0]["direction"] == "right"

    table.queue("select", [payload])
    fetched = repository.get_result(result.id)

    assert fetched == result
    assert ("id", str(result.id)) in table.last_filters


def test_supabase_session_result_repository_raises_on_failed_insert() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseSessionResultRepository(client)

    with pytest.raises(RuntimeError):
        repository.save_result(_session_result())


def test_supabase_session_result_repository_lists_results() -> None:
    client = FakeSupabaseClient()
    table = client.table("discovery_sessions")
    table.queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "created_at": "2024-03-02T10:30:00+00:00",
                "client_name": None,
                "decisions_json": [],
                "summary_json": None,
            }
        ],
    )

    results = SupabaseSessionResultRepository(client).list_results(limit=5)

    assert len(results) == 1
    assert results[0].summary == ScoringSummary()
    assert SupabaseSessionResultRepository(client).get_result(uuid4()) is None


def test_supabase_library_repository_set_active() -> None:
    client = FakeSupabaseClient()
    table = client.table("library_images")
    table.queue(
        "update",
        [
            {
                "id": "img-4",
                "url": "https://cdn.example.com/4.jpg",
                "room_type": "Kitchen",
                "style_category_ids": ["2"],
                "is_active": False,
            }
        ],
    )
    repository = SupabaseLibraryRepository(client)

    image = repository.set_active("img-4", False)

    assert not image.is_active
    assert table.last_payload == {"is_active": False}
    assert ("id", "img-4") in table.last_filters
    with pytest.raises(RuntimeError):
        repository.set_active("missing", True)


def test_supabase_studio_settings_keep_stored_zero() -> None:
    client = FakeSupabaseClient()
    client.table("studio_settings").queue(
        "select",
        [
            {
                "client_name": "",
                "session_length": None,
                "min_required_images": 0,
                "standout_count": 0,
            }
        ],
    )

    settings = SupabaseStudioSettingsRepository(client).get_settings()

    assert settings is not None
    assert settings.client_name is None
    assert settings.session_length == 30
    assert settings.min_required_images == 0
    assert settings.standout_count == 0


def test_supabase_session_result_tolerates_null_decision_categories() -> None:
    client = FakeSupabaseClient()
    client.table("discovery_sessions").queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "created_at": "2024-03-02T10:30:00+00:00",
                "client_name": "Avery",
                "decisions_json": [
                    {
                        "image_id": "img-1",
                        "direction": "left",
                        "response_time_ms": 700,
                        "undo_used": False,
                        "room_type": "Bedroom",
                        "style_categories": None,
                    }
                ],
                "summary_json": None,
            }
        ],
    )

    results = SupabaseSessionResultRepository(client).list_results(limit=1)

    decision = results[0].decisions[0]
    assert decision.style_categories == frozenset()
    assert decision.direction is SwipeDirection.REJECT

import asyncio
from datetime import datetime, timezone

import pytest

from trendguesser.models.envelope import STATE_KEY, GameNotFoundError
from trendguesser.models.game import LegacyGameState
from trendguesser.models.player import LegacyPlayer
from trendguesser.models.term import SearchTerm
from trendguesser.services.game_documents import GameDocumentService
from trendguesser.services.game_sync import GameStateSync
from trendguesser.services.type_adapters import SchemaAdapter

from conftest import make_document


@pytest.fixture
def sync(seeded_store):
    adapter = SchemaAdapter(clock=lambda: datetime(2024, 5, 1, tzinfo=timezone.utc))
    return GameStateSync(GameDocumentService(seeded_store), adapter)


def test_load_legacy_adapts_embedded_canonical_state(sync):
    legacy = asyncio.run(sync.load_legacy("g1"))

    assert legacy.game_id == "g1"
    assert legacy.current_round == 3
    assert legacy.started is True
    assert legacy.category == "sports"
    assert legacy.used_terms == []


def test_push_legacy_merges_state_and_player_score(sync, seeded_store):
    legacy = LegacyGameState(
        game_id="g1",
        current_round=5,
        known_term=SearchTerm(id="t1", term="Golf", volume=50, category="sports"),
        category="sports",
        started=True,
        used_terms=["t0", "t1"],
    )

    result = asyncio.run(sync.push_legacy("g1", legacy, LegacyPlayer(uid="p2", name="Bob")))

    assert result == {"success": True, "updatedPlayers": ["p2"]}
    document = asyncio.run(seeded_store.get_game("g1"))
    assert document["p2"] == {"name": "Bob", "score": 4}
    assert document["p1"] == {"score": 5, "name": "Alice"}
    state = document[STATE_KEY]
    assert state["round"] == 5
    assert state["score"] == 4
    assert state["knownTerm"]["imageUrl"] == "/image?term=Golf"
    assert state["hiddenTerm"] is None


def test_push_then_load_round_trip(sync):
    legacy = LegacyGameState(game_id="g1", current_round=2, category="animals", started=True)

    asyncio.run(sync.push_legacy("g1", legacy))
    loaded = asyncio.run(sync.load_legacy("g1"))

    assert loaded.current_round == 2
    assert loaded.category == "animals"


def test_load_legacy_accepts_legacy_shaped_state(seeded_store, sync):
    asyncio.run(
        seeded_store.create_game(
            make_document("g2") | {STATE_KEY: {"currentRound": 7, "category": "news", "started": True, "usedTerms": ["a"]}}
        )
    )

    legacy = asyncio.run(sync.load_legacy("g2"))

    assert legacy.current_round == 7
    assert legacy.used_terms == ["a"]


def test_load_legacy_without_state_starts_fresh(seeded_store, sync):
    document = make_document("g3")
    del document[STATE_KEY]
    asyncio.run(seeded_store.create_game(document))

    legacy = asyncio.run(sync.load_legacy("g3"))

    assert legacy.started is False
    assert legacy.current_round == 1
    assert legacy.custom_term is None


def test_load_legacy_missing_game(sync):
    with pytest.raises(GameNotFoundError):
        asyncio.run(sync.load_legacy("nope"))


@pytest.mark.parametrize(
    "state",
    [
        {"round": 0, "score": 0},
        {"round": "three"},
        {"currentRound": "late"},
        "garbage",
        [1, 2, 3],
    ],
)
def test_load_legacy_unreadable_state_starts_fresh(seeded_store, sync, state, caplog):
    asyncio.run(GameDocumentService(seeded_store).merge_update("g1", {STATE_KEY: state}))

    legacy = asyncio.run(sync.load_legacy("g1"))

    assert legacy.game_id == "g1"
    assert legacy.current_round == 1
    assert legacy.started is False
    assert "starting fresh" in caplog.text


def test_load_legacy_ignores_malformed_envelope_fields(seeded_store, sync):
    asyncio.run(
        GameDocumentService(seeded_store).merge_update("g1", {"createdAt": 12, "p3": {"score": "lots"}})
    )

    legacy = asyncio.run(sync.load_legacy("g1"))

    assert legacy.current_round == 3

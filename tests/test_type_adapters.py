from datetime import datetime, timezone

import pytest

from trendguesser.models.game import CanonicalGameState, LegacyGameState
from trendguesser.models.player import CanonicalPlayer, LegacyPlayer
from trendguesser.models.term import CANONICAL_CATEGORIES, LEGACY_CATEGORIES, SearchTerm
from trendguesser.services.type_adapters import SchemaAdapter, validate_category

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def adapter():
    return SchemaAdapter(clock=lambda: FIXED_NOW, image_route="/image")


def _term(term_id: str, label: str, **extra) -> SearchTerm:
    return SearchTerm(id=term_id, term=label, volume=1200, category="sports", **extra)


def test_to_canonical_derives_score_from_round(adapter):
    legacy = LegacyGameState(
        game_id="g1",
        current_round=4,
        known_term=_term("t1", "Football"),
        hidden_term=_term("t2", "Tennis"),
        category="sports",
        started=True,
        finished=True,
        winner="p1",
        used_terms=["t0", "t1"],
    )

    canonical = adapter.to_canonical(legacy)

    assert canonical.round == 4
    assert canonical.score == 3
    assert canonical.finished is True
    assert canonical.high_score is False
    assert canonical.known_term.term == "Football"
    assert canonical.category == "sports"


@pytest.mark.parametrize("current_round", [None, 0, -2])
def test_to_canonical_defaults_missing_round(adapter, current_round):
    canonical = adapter.to_canonical(LegacyGameState(current_round=current_round))

    assert canonical.round == 1
    assert canonical.score == 0
    assert canonical.game_id == ""
    assert canonical.known_term is None
    assert canonical.hidden_term is None


def test_to_legacy_resets_session_history(adapter):
    canonical = CanonicalGameState(game_id="g1", score=2, round=3, category="general", finished=False)

    legacy = adapter.to_legacy(canonical)

    assert legacy.current_round == 3
    assert legacy.started is True
    assert legacy.used_terms == []
    assert legacy.terms == []
    assert legacy.winner is None
    # `general` n'existe pas côté legacy
    assert legacy.category == "everything"


def test_legacy_custom_term_serialized_as_null(adapter):
    legacy = adapter.to_legacy(CanonicalGameState(game_id="g1"))

    dumped = legacy.model_dump(by_alias=True)
    assert "customTerm" in dumped
    assert dumped["customTerm"] is None


def test_round_trip_preserves_state(adapter):
    known = _term("t1", "Football", image_url="https://img/1.jpg", timestamp="2024-01-01T00:00:00+00:00")
    hidden = _term("t2", "Tennis", image_url="https://img/2.jpg", timestamp="2024-01-02T00:00:00+00:00")
    original = CanonicalGameState(
        game_id="g1", score=5, round=6, known_term=known, hidden_term=hidden, category="sports", finished=True
    )

    restored = adapter.to_canonical(adapter.to_legacy(original))

    assert restored.round == original.round
    assert restored.score == original.score
    assert restored.known_term == original.known_term
    assert restored.hidden_term == original.hidden_term
    assert restored.category == original.category
    assert restored.finished == original.finished


def test_round_trip_recomputes_inconsistent_score(adapter):
    original = CanonicalGameState(game_id="g1", score=10, round=3)

    restored = adapter.to_canonical(adapter.to_legacy(original))

    assert restored.score == 2


@pytest.mark.parametrize(
    "value,allowed,expected",
    [
        ("sports", CANONICAL_CATEGORIES, "sports"),
        ("general", CANONICAL_CATEGORIES, "general"),
        ("general", LEGACY_CATEGORIES, "everything"),
        ("hands", CANONICAL_CATEGORIES, "everything"),
        ("", CANONICAL_CATEGORIES, "everything"),
        ("SPORTS", CANONICAL_CATEGORIES, "everything"),
        (None, CANONICAL_CATEGORIES, "everything"),
        (42, LEGACY_CATEGORIES, "everything"),
    ],
)
def test_validate_category(value, allowed, expected):
    result = validate_category(value, allowed)

    assert result == expected
    assert result in allowed
    assert validate_category(result, allowed) == result


def test_adapt_item_synthesizes_image_and_timestamp(adapter):
    item = adapter.adapt_item(_term("t1", "Fish & Chips"))

    assert item.image_url == "/image?term=Fish%20%26%20Chips"
    assert item.timestamp == FIXED_NOW.isoformat()


def test_adapt_item_treats_empty_strings_as_absent(adapter):
    item = adapter.adapt_item(_term("t1", "Cats", image_url="", timestamp=""))

    assert item.image_url == "/image?term=Cats"
    assert item.timestamp == FIXED_NOW.isoformat()


def test_adapt_item_preserves_existing_values(adapter):
    item = adapter.adapt_item(_term("t1", "Cats", image_url="https://img/cat.jpg", timestamp="2023-03-03T00:00:00Z"))

    assert item.image_url == "https://img/cat.jpg"
    assert item.timestamp == "2023-03-03T00:00:00Z"
    assert item.volume == 1200
    assert item.id == "t1"


def test_adapt_item_replaces_unknown_category(adapter):
    item = SearchTerm(id="t1", term="Cats", volume=3, category="hands")

    assert adapter.adapt_item(item).category == "everything"


def test_to_canonical_player_defaults(adapter):
    player = adapter.to_canonical_player(LegacyPlayer(uid="p1", name="Alice"))

    assert player.uid == "p1"
    assert player.score == 0
    assert player.high_scores == {}


@pytest.mark.parametrize(
    "uid,player_id,expected",
    [
        ("web-1", "mobile-1", "web-1"),
        (None, "mobile-1", "mobile-1"),
        ("", "mobile-1", "mobile-1"),
        (None, None, ""),
    ],
)
def test_to_legacy_player_identifier_fallback(adapter, uid, player_id, expected):
    player = adapter.to_legacy_player(CanonicalPlayer(uid=uid, id=player_id, name="Bob", score=None))

    assert player.uid == expected
    assert player.score == 0
    assert player.high_scores == {}


def test_to_legacy_player_keeps_high_scores(adapter):
    player = adapter.to_legacy_player(CanonicalPlayer(uid="p1", name="Bob", score=7, high_scores={"sports": 7}))

    assert player.score == 7
    assert player.high_scores == {"sports": 7}

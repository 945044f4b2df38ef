import asyncio

import pytest
from fastapi.testclient import TestClient

from trendguesser.main import create_app
from trendguesser.models.envelope import STATE_KEY
from trendguesser.services.game_store import JsonGameStore


def make_document(game_id: str = "g1", **players) -> dict:
    document = {
        "id": game_id,
        "createdAt": "2024-01-01T00:00:00+00:00",
        "createdBy": "p1",
        "gameType": "trendguesser",
        "status": "active",
        STATE_KEY: {
            "gameId": game_id,
            "score": 2,
            "round": 3,
            "knownTerm": None,
            "hiddenTerm": None,
            "category": "sports",
            "finished": False,
            "highScore": False,
        },
    }
    document.update(players)
    return document


@pytest.fixture
def store(tmp_path):
    return JsonGameStore(tmp_path)


@pytest.fixture
def seeded_store(store):
    asyncio.run(store.create_game(make_document("g1", p1={"score": 5, "name": "Alice"})))
    return store


@pytest.fixture
def client(seeded_store):
    return TestClient(create_app(seeded_store))

"""
Dépendances de stockage
=======================

Le store est construit UNE fois par `create_app(store)` et rangé dans
`app.state.store`; les routes le récupèrent ici via `Depends(...)`.
Aucun singleton de module : un test peut monter une app sur son propre store.
"""
from fastapi import Request

from trendguesser.config.settings import settings
from trendguesser.services.game_documents import GameDocumentService
from trendguesser.services.game_store import GameStore


def get_store(request: Request) -> GameStore:
    return request.app.state.store


def get_documents(request: Request) -> GameDocumentService:
    return GameDocumentService(get_store(request), leaderboard_limit=settings.LEADERBOARD_LIMIT)

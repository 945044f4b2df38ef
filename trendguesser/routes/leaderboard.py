"""
Module routes/leaderboard.py
Rôle:
- Expose le classement d'une catégorie (score décroissant, `LEADERBOARD_LIMIT` entrées).

Notes:
- `category` est obligatoire mais sa valeur n'est pas contrôlée ici : une catégorie
  inconnue renvoie simplement une liste vide.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from trendguesser.deps.storage import get_documents
from trendguesser.routes.http_errors import ROUTED_METHODS, method_not_allowed, service_errors
from trendguesser.services.game_documents import GameDocumentService

router = APIRouter(tags=["leaderboard"])


@router.api_route("/leaderboard", methods=ROUTED_METHODS)
async def leaderboard(
    request: Request,
    category: Optional[str] = Query(default=None, description="Catégorie du classement"),
    documents: GameDocumentService = Depends(get_documents),
):
    """Retourne le classement des joueurs pour `category`."""
    if request.method not in ("GET", "HEAD"):
        raise method_not_allowed(request.method, ("GET",))
    with service_errors("GET /leaderboard", category=category):
        return await documents.leaderboard(category)

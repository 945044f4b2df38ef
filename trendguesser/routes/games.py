"""
Module routes/games.py
Rôle:
- Lecture et mise à jour partielle d'un document de partie.

Endpoints:
- GET          /games/{game_id} -> document complet, tel que stocké (aucune adaptation)
- PATCH | PUT  /games/{game_id} -> merge superficiel du corps JSON
                                   -> {"success": true, "updatedPlayers": [...]}
- autre méthode (OPTIONS inclus) -> 405, `Allow: GET, PATCH, PUT`
- /games/ sans identifiant      -> 400

Notes:
- PUT se comporte comme PATCH (merge, jamais remplacement complet): une mise à jour
  du score du joueur A ne doit pas effacer l'entrée du joueur B ni l'état embarqué.
- Le corps est parsé avec orjson; corps vide/illisible/non-objet -> 400.
"""
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from trendguesser.deps.storage import get_documents
from trendguesser.models.envelope import InvalidRequestError, validate_game_id
from trendguesser.routes.http_errors import ROUTED_METHODS, method_not_allowed, service_errors
from trendguesser.services.game_documents import GameDocumentService
from trendguesser.services.io_utils import JSONDecodeError, loads

router = APIRouter(prefix="/games", tags=["games"])

ALLOWED_METHODS = ("GET", "PATCH", "PUT")


def _parse_body(raw: bytes) -> Any:
    if not raw:
        raise InvalidRequestError("update_data_required")
    try:
        return loads(raw)
    except JSONDecodeError:
        raise InvalidRequestError("invalid_json")


@router.api_route("", methods=ROUTED_METHODS, include_in_schema=False)
@router.api_route("/", methods=ROUTED_METHODS, include_in_schema=False)
async def missing_game_id():
    """`/games/` sans identifiant -> 400 (pas le 404 de routage)."""
    raise HTTPException(status_code=400, detail="game_id_required")


@router.api_route("/{game_id}", methods=ROUTED_METHODS)
async def game_document(
    game_id: str,
    request: Request,
    documents: GameDocumentService = Depends(get_documents),
):
    """Lecture (GET) ou merge partiel (PATCH/PUT) d'une partie."""
    method = request.method
    with service_errors(f"{method} /games/{game_id}", game_id=game_id, method=method):
        validate_game_id(game_id)
        if method in ("GET", "HEAD"):
            return await documents.read(game_id)
        if method in ("PATCH", "PUT"):
            payload = _parse_body(await request.body())
            return await documents.merge_update(game_id, payload)
        raise method_not_allowed(method, ALLOWED_METHODS)

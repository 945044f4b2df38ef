"""
Module routes/highscores.py
Rôle:
- Enregistre un score de fin de partie (meilleur score par catégorie + leaderboard).

Corps attendu: {"playerUid": str, "category": str, "score": entier >= 0}
Réponse: {"success": true, "player": {...}}
"""
from fastapi import APIRouter, Depends, Request

from trendguesser.deps.storage import get_store
from trendguesser.models.envelope import InvalidRequestError
from trendguesser.routes.http_errors import ROUTED_METHODS, method_not_allowed, service_errors
from trendguesser.services.game_store import GameStore
from trendguesser.services.highscores import record_high_score, validate_high_score
from trendguesser.services.io_utils import JSONDecodeError, loads

router = APIRouter(tags=["highscores"])


@router.api_route("/highscores", methods=ROUTED_METHODS)
async def highscores(request: Request, store: GameStore = Depends(get_store)):
    if request.method != "POST":
        raise method_not_allowed(request.method, ("POST",))
    with service_errors("POST /highscores"):
        try:
            body = loads(await request.body() or b"{}")
        except JSONDecodeError:
            raise InvalidRequestError("invalid_json")
        if not isinstance(body, dict):
            raise InvalidRequestError("invalid_json")
        player_uid = body.get("playerUid")
        category = body.get("category")
        score = validate_high_score(player_uid, category, body.get("score"))
        player = await record_high_score(store, player_uid, category, score)
        return {"success": True, "player": player}

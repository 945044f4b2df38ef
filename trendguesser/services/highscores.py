"""
Service: highscores.py
Rôle :
- Enregistrer le score de fin de partie d'un joueur dans une catégorie.

Règles :
- Le meilleur score d'une catégorie ne fait que monter (un score inférieur ou égal
  est ignoré, ni le joueur ni le leaderboard ne sont réécrits).
- Le score doit être un entier positif (un flottant entier comme 4.0 est accepté).
- Joueur inconnu : il est créé (`name="Player"`, score 0) avec ce meilleur score.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from trendguesser.models.envelope import InvalidRequestError
from .game_store import DEFAULT_PLAYER_NAME, GameStore

logger = logging.getLogger(__name__)


def validate_high_score(player_uid: Any, category: Any, score: Any) -> int:
    """Contrôle le corps de /highscores et renvoie le score entier."""
    if not player_uid or not category or score is None:
        raise InvalidRequestError("player_uid_category_score_required")
    # bool est un int en Python : refusé explicitement
    if isinstance(score, bool) or not isinstance(score, (int, float)) or score < 0:
        raise InvalidRequestError("score_must_be_positive_number")
    # un score est un nombre de manches : 4.0 passe, 3.5 non
    if isinstance(score, float) and not score.is_integer():
        raise InvalidRequestError("score_must_be_integer")
    return int(score)


async def record_high_score(store: GameStore, player_uid: str, category: str, score: int) -> Optional[Dict[str, Any]]:
    """Met à jour le meilleur score puis renvoie le joueur à jour."""
    player = await store.get_player(player_uid)
    if player is None:
        await store.update_player(
            player_uid,
            {"name": DEFAULT_PLAYER_NAME, "score": 0, "highScores": {category: score}},
        )
        await store.update_leaderboard(player_uid, category, score, DEFAULT_PLAYER_NAME)
    else:
        high_scores = dict(player.get("highScores") or {})
        best = high_scores.get(category)
        if best is None or score > best:
            high_scores[category] = score
            await store.update_player(player_uid, {"highScores": high_scores})
            await store.update_leaderboard(player_uid, category, score, player.get("name") or DEFAULT_PLAYER_NAME)
            logger.info("new high score uid=%s category=%s score=%s", player_uid, category, score)
    return await store.get_player(player_uid)

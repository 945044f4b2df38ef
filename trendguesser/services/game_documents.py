"""
Service: game_documents.py
Rôle :
- Lecture et merge partiel des documents de partie, lecture du leaderboard.
- Indépendant des schémas : le document est rendu tel quel, l'adaptation
  (canonique <-> legacy) est à la charge de l'appelant.

Erreurs levées (traduites en HTTP par les routes) :
- `InvalidRequestError` -> 400
- `GameNotFoundError`   -> 404
- toute autre exception remonte telle quelle (-> 500 côté route)

Merge :
- superficiel : seules les clés présentes dans le payload sont écrasées;
  une mise à jour du joueur A ne touche ni le joueur B ni l'état embarqué.
- dernière écriture gagnante sur une même clé (pas de contrôle de version).
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from trendguesser.models.envelope import (
    GameNotFoundError,
    player_keys,
    validate_category_param,
    validate_game_id,
    validate_update_payload,
)
from .game_store import GameStore

logger = logging.getLogger(__name__)


class GameDocumentService:
    def __init__(self, store: GameStore, leaderboard_limit: int = 10) -> None:
        self.store = store
        self.leaderboard_limit = leaderboard_limit

    async def read(self, game_id: Any) -> Dict[str, Any]:
        game_id = validate_game_id(game_id)
        document = await self.store.get_game(game_id)
        if document is None:
            raise GameNotFoundError(game_id)
        return document

    async def merge_update(self, game_id: Any, payload: Any) -> Dict[str, Any]:
        """Applique `payload` en merge superficiel et retourne les joueurs touchés."""
        game_id = validate_game_id(game_id)
        updates = validate_update_payload(game_id, payload)
        if await self.store.get_game(game_id) is None:
            raise GameNotFoundError(game_id)

        await self.store.update_game(game_id, updates)

        updated = player_keys(updates)
        logger.info("game %s updated (players=%s)", game_id, updated)
        return {"success": True, "updatedPlayers": updated}

    async def leaderboard(self, category: Any) -> List[Dict[str, Any]]:
        category = validate_category_param(category)
        return await self.store.get_leaderboard_by_category(category, limit=self.leaderboard_limit)

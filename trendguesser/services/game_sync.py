"""
Service: game_sync.py
Rôle :
- Synchroniser la surface legacy avec le document de partie partagé.
- Lecture : document -> `GameEnvelope` -> état embarqué -> `LegacyGameState`
  (via l'adaptateur si l'état est canonique).
- Écriture : `LegacyGameState` -> canonique -> merge partiel sous `__trendguesser.state`
  (+ `ScoreRecord` du joueur si fourni).

L'état embarqué dépend de la surface qui l'a écrit : un état qui porte
`currentRound` est déjà au format legacy et n'est pas re-adapté.
Le merge est agnostique des schémas : un état illisible (pas un objet, round < 1,
champ mal typé) est journalisé puis remplacé par un état legacy neuf.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from trendguesser.models.envelope import STATE_KEY, GameEnvelope, ScoreRecord
from trendguesser.models.game import CanonicalGameState, LegacyGameState
from trendguesser.models.player import LegacyPlayer
from .game_documents import GameDocumentService
from .type_adapters import SchemaAdapter

logger = logging.getLogger(__name__)


class GameStateSync:
    def __init__(self, documents: GameDocumentService, adapter: SchemaAdapter) -> None:
        self.documents = documents
        self.adapter = adapter

    async def load_legacy(self, game_id: str) -> LegacyGameState:
        envelope = GameEnvelope.from_document(await self.documents.read(game_id), game_id=game_id)
        raw = envelope.state
        if not raw:
            return LegacyGameState(game_id=game_id)
        if not isinstance(raw, Mapping):
            logger.warning("game %s: embedded state is not an object (%s), starting fresh", game_id, type(raw).__name__)
            return LegacyGameState(game_id=game_id)
        try:
            if "currentRound" in raw:
                return LegacyGameState.model_validate(raw)
            return self.adapter.to_legacy(CanonicalGameState.model_validate(raw))
        except ValidationError as exc:
            logger.warning("game %s: unreadable embedded state, starting fresh (%s)", game_id, exc.errors())
            return LegacyGameState(game_id=game_id)

    async def push_legacy(
        self,
        game_id: str,
        legacy: LegacyGameState,
        player: Optional[LegacyPlayer] = None,
    ) -> Dict[str, Any]:
        canonical = self.adapter.to_canonical(legacy)
        if not canonical.game_id:
            canonical.game_id = game_id
        payload: Dict[str, Any] = {STATE_KEY: canonical.model_dump(by_alias=True)}
        if player is not None and player.uid:
            record = ScoreRecord(score=canonical.score, name=player.name)
            payload[player.uid] = record.model_dump(exclude_none=True)
        return await self.documents.merge_update(game_id, payload)

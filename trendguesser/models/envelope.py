"""
Models / envelope.py
Rôle:
- Modéliser le document de partie persisté (multi-joueurs) et ses règles de clés.

Structure d'un document:
- clés fixes: `id`, `createdAt`, `createdBy`, `gameType`, `status`;
- clé réservée `__trendguesser.state`: état de jeu embarqué (canonique, ou legacy
  selon la surface qui l'a écrit);
- une entrée par joueur, sous la clé `<player uid>`: `{"score": int, ...}`;
- toute autre clé inconnue est conservée telle quelle (`extras`).

Règle de classification (unique, voir `is_player_entry`):
- une clé est une entrée joueur si elle n'est pas réservée ET si sa valeur est un
  objet contenant `score`.

Les helpers `validate_*` servent à la route PATCH/PUT (erreurs -> 400).
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

STATE_KEY = "__trendguesser.state"
GAME_TYPE = "trendguesser"

ENVELOPE_KEYS = ("id", "createdAt", "createdBy", "gameType", "status")
RESERVED_KEYS = frozenset(ENVELOPE_KEYS) | {STATE_KEY}


class GameStatus(str, Enum):
    WAITING = "waiting"
    ACTIVE = "active"
    FINISHED = "finished"
    INACTIVE = "inactive"


GAME_STATUSES = frozenset(s.value for s in GameStatus)


class InvalidRequestError(ValueError):
    """Requête invalide (identifiant, catégorie ou payload) -> 400."""


class GameNotFoundError(LookupError):
    """Document de partie introuvable -> 404."""


class ScoreRecord(BaseModel):
    """Entrée de score d'un joueur (champs supplémentaires conservés)."""

    score: int = 0
    name: Optional[str] = None

    model_config = ConfigDict(extra="allow")


def is_player_entry(key: str, value: Any) -> bool:
    """Vrai si `key: value` est une entrée de score joueur."""
    if key in RESERVED_KEYS:
        return False
    return isinstance(value, Mapping) and "score" in value


def player_keys(payload: Mapping[str, Any]) -> List[str]:
    """Clés joueur touchées par un payload (ordre du payload conservé)."""
    return [key for key, value in payload.items() if is_player_entry(key, value)]


class GameEnvelope(BaseModel):
    """Vue typée d'un document: champs fixes + {uid: ScoreRecord} + état embarqué.

    `from_document` ne lève pas sur un document stocké hétérogène : un champ fixe mal
    typé garde sa valeur par défaut, une entrée joueur invalide reste dans `extras`,
    l'état embarqué est conservé brut (sa validation appartient à l'appelant).
    """

    id: str
    created_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    created_by: str = "unknown"
    game_type: Literal["trendguesser"] = GAME_TYPE
    status: GameStatus = GameStatus.WAITING
    state: Any = None
    players: Dict[str, ScoreRecord] = Field(default_factory=dict)
    extras: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_document(cls, document: Mapping[str, Any], game_id: str = "") -> "GameEnvelope":
        players: Dict[str, ScoreRecord] = {}
        extras: Dict[str, Any] = {}
        for key, value in document.items():
            if key in RESERVED_KEYS:
                continue
            if is_player_entry(key, value):
                try:
                    players[key] = ScoreRecord.model_validate(dict(value))
                    continue
                except ValidationError:
                    pass
            extras[key] = value
        doc_id = document.get("id")
        fields: Dict[str, Any] = {
            "id": doc_id if isinstance(doc_id, str) else game_id,
            "state": document.get(STATE_KEY),
            "players": players,
            "extras": extras,
        }
        if isinstance(document.get("createdAt"), str):
            fields["created_at"] = document["createdAt"]
        if isinstance(document.get("createdBy"), str):
            fields["created_by"] = document["createdBy"]
        status = document.get("status")
        if isinstance(status, str) and status in GAME_STATUSES:
            fields["status"] = document["status"]
        return cls(**fields)

    def to_document(self) -> Dict[str, Any]:
        """Aplatit l'enveloppe vers la forme stockée."""
        document: Dict[str, Any] = dict(self.extras)
        for uid, record in self.players.items():
            document[uid] = record.model_dump(exclude_none=True)
        document.update(
            {
                "id": self.id,
                "createdAt": self.created_at,
                "createdBy": self.created_by,
                "gameType": self.game_type,
                "status": self.status.value,
            }
        )
        if self.state is not None:
            document[STATE_KEY] = self.state
        return document


# -----------------------------
# Validation (routes /games)
# -----------------------------
def validate_game_id(game_id: Any) -> str:
    if not isinstance(game_id, str) or not game_id.strip():
        raise InvalidRequestError("game_id_required")
    return game_id


def validate_update_payload(game_id: str, payload: Any) -> Dict[str, Any]:
    """Contrôle un payload de merge partiel avant écriture."""
    if not isinstance(payload, dict) or not payload:
        raise InvalidRequestError("update_data_required")
    status = payload.get("status")
    if "status" in payload and (not isinstance(status, str) or status not in GAME_STATUSES):
        raise InvalidRequestError("invalid_status")
    if "id" in payload and payload["id"] != game_id:
        raise InvalidRequestError("id_mismatch")
    return payload


def validate_category_param(category: Any) -> str:
    if not isinstance(category, str) or not category:
        raise InvalidRequestError("category_required")
    return category

"""
Service: game_store.py
Rôle :
- Définir le contrat de stockage (`GameStore`) utilisé par les routes et services.
- Fournir une implémentation fichiers JSON (`JsonGameStore`), une partie = un fichier.

Stockage (sous `DATA_DIR`) :
- `games/<game_id>.json`  : document de partie complet (enveloppe + joueurs + état)
- `players.json`          : {uid: {uid, name, score, highScores}}
- `leaderboard.json`      : {catégorie: {uid: {uid, name, score, timestamp}}}

Concurrence :
- Les I/O disque sont déportées dans un thread (`anyio.to_thread.run_sync`).
- Chaque lecture-modification-écriture est faite sous un `RLock` : deux merges
  concurrents sur des clés joueur différentes survivent tous les deux.
- Deux écritures sur la MÊME clé : la dernière gagne (pas de jeton de version).
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from threading import RLock
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import anyio

from .io_utils import read_json, write_json

logger = logging.getLogger(__name__)

GAMES_DIRNAME = "games"
PLAYERS_FILENAME = "players.json"
LEADERBOARD_FILENAME = "leaderboard.json"
DEFAULT_PLAYER_NAME = "Player"


class GameStore(ABC):
    """Contrat du collaborateur de stockage (toutes les méthodes sont async)."""

    @abstractmethod
    async def get_game(self, game_id: str) -> Optional[Dict[str, Any]]: ...

    @abstractmethod
    async def create_game(self, document: Dict[str, Any]) -> None: ...

    @abstractmethod
    async def update_game(self, game_id: str, updates: Dict[str, Any]) -> None:
        """Merge superficiel de `updates` dans le document existant."""

    @abstractmethod
    async def get_player(self, uid: str) -> Optional[Dict[str, Any]]: ...

    @abstractmethod
    async def update_player(self, uid: str, updates: Dict[str, Any]) -> None: ...

    @abstractmethod
    async def get_leaderboard_by_category(self, category: str, limit: int = 10) -> List[Dict[str, Any]]: ...

    @abstractmethod
    async def update_leaderboard(self, uid: str, category: str, score: int, name: str) -> None: ...


class JsonGameStore(GameStore):
    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)
        self._lock = RLock()

    # -----------------------------
    # Chemins
    # -----------------------------
    def _game_path(self, game_id: str) -> Path:
        # quote(safe="") : pas de séparateur de chemin possible dans le nom
        return self.data_dir / GAMES_DIRNAME / f"{quote(game_id, safe='')}.json"

    def _players_path(self) -> Path:
        return self.data_dir / PLAYERS_FILENAME

    def _leaderboard_path(self) -> Path:
        return self.data_dir / LEADERBOARD_FILENAME

    # -----------------------------
    # Parties
    # -----------------------------
    def _get_game_sync(self, game_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            document = read_json(self._game_path(game_id))
        if not isinstance(document, dict):
            return None
        return document

    def _create_game_sync(self, document: Dict[str, Any]) -> None:
        with self._lock:
            path = self._game_path(document["id"])
            if path.exists():
                raise FileExistsError(f"game already exists: {document['id']}")
            write_json(path, document)

    def _update_game_sync(self, game_id: str, updates: Dict[str, Any]) -> None:
        with self._lock:
            path = self._game_path(game_id)
            document = read_json(path)
            if not isinstance(document, dict):
                raise KeyError(game_id)
            document.update(updates)
            write_json(path, document)
        logger.debug("game %s merged keys=%s", game_id, list(updates))

    async def get_game(self, game_id: str) -> Optional[Dict[str, Any]]:
        return await anyio.to_thread.run_sync(self._get_game_sync, game_id)

    async def create_game(self, document: Dict[str, Any]) -> None:
        await anyio.to_thread.run_sync(self._create_game_sync, document)

    async def update_game(self, game_id: str, updates: Dict[str, Any]) -> None:
        await anyio.to_thread.run_sync(self._update_game_sync, game_id, updates)

    # -----------------------------
    # Joueurs
    # -----------------------------
    def _read_players(self) -> Dict[str, Dict[str, Any]]:
        return read_json(self._players_path()) or {}

    def _get_player_sync(self, uid: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self._read_players().get(uid)

    def _update_player_sync(self, uid: str, updates: Dict[str, Any]) -> None:
        with self._lock:
            players = self._read_players()
            player = players.get(uid)
            if player is None:
                player = {
                    "uid": uid,
                    "name": updates.get("name") or DEFAULT_PLAYER_NAME,
                    "score": updates.get("score") or 0,
                    "highScores": updates.get("highScores") or {},
                }
            else:
                if updates.get("name"):
                    player["name"] = updates["name"]
                if updates.get("score") is not None:
                    player["score"] = updates["score"]
                if updates.get("highScores"):
                    player["highScores"] = updates["highScores"]
            players[uid] = player
            write_json(self._players_path(), players)

    async def get_player(self, uid: str) -> Optional[Dict[str, Any]]:
        return await anyio.to_thread.run_sync(self._get_player_sync, uid)

    async def update_player(self, uid: str, updates: Dict[str, Any]) -> None:
        await anyio.to_thread.run_sync(self._update_player_sync, uid, updates)

    # -----------------------------
    # Leaderboard
    # -----------------------------
    def _leaderboard_sync(self, category: str, limit: int) -> List[Dict[str, Any]]:
        with self._lock:
            board = read_json(self._leaderboard_path()) or {}
            players = self._read_players()
        rows = []
        for uid, entry in (board.get(category) or {}).items():
            high_scores = (players.get(uid) or {}).get("highScores") or {category: entry["score"]}
            rows.append(
                {
                    "uid": uid,
                    "name": entry.get("name", DEFAULT_PLAYER_NAME),
                    "score": int(entry["score"]),
                    "highScores": high_scores,
                }
            )
        # Tri en ordre décroissant (du meilleur score au plus faible)
        rows.sort(key=lambda r: r["score"], reverse=True)
        return rows[:limit]

    def _update_leaderboard_sync(self, uid: str, category: str, score: int, name: str) -> None:
        with self._lock:
            board = read_json(self._leaderboard_path()) or {}
            entries = board.setdefault(category, {})
            current = entries.get(uid)
            if current is not None and score <= current["score"]:
                return
            entries[uid] = {
                "uid": uid,
                "name": name,
                "score": score,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
            write_json(self._leaderboard_path(), board)

    async def get_leaderboard_by_category(self, category: str, limit: int = 10) -> List[Dict[str, Any]]:
        return await anyio.to_thread.run_sync(self._leaderboard_sync, category, limit)

    async def update_leaderboard(self, uid: str, category: str, score: int, name: str) -> None:
        await anyio.to_thread.run_sync(self._update_leaderboard_sync, uid, category, score, name)

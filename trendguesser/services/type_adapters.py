"""
Service: type_adapters.py
Rôle :
- Traduire l'état de jeu entre le schéma legacy (client web) et le schéma canonique
  (moteur de jeu + surfaces partagées), ainsi que les joueurs et les termes.

Règles :
- `score = round - 1` est l'unique règle de réconciliation legacy -> canonique.
- Toute catégorie traversant la frontière est validée; inconnue -> `everything`.
- Un terme sortant a toujours une `imageUrl` et un `timestamp` (synthétisés si absents).
- canonique -> legacy : `started=True`, `usedTerms`/`terms` vidés, `customTerm=None`.
  L'historique legacy est volontairement perdu : le client le reconstruit à partir
  de sa propre session, jamais d'un aller-retour.

Aucune fonction ne fait d'I/O ni ne lève d'exception : chaque absence est résolue
vers une valeur par défaut documentée. Les seules dépendances (horloge, route image)
sont injectées au constructeur.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Collection, Optional

from trendguesser.config.settings import settings
from trendguesser.models.game import CanonicalGameState, LegacyGameState
from trendguesser.models.player import CanonicalPlayer, LegacyPlayer
from trendguesser.models.term import (
    CANONICAL_CATEGORIES,
    DEFAULT_CATEGORY,
    LEGACY_CATEGORIES,
    SearchTerm,
)
from trendguesser.services.images import placeholder_image_url

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_category(value: Any, allowed: Collection[str] = CANONICAL_CATEGORIES) -> str:
    """Retourne `value` si reconnue dans `allowed`, sinon la catégorie par défaut."""
    if isinstance(value, str) and value in allowed:
        return value
    return DEFAULT_CATEGORY


def _present(value: Optional[str]) -> bool:
    return value is not None and value != ""


class SchemaAdapter:
    """Adaptateur legacy <-> canonique (sans état entre deux appels)."""

    def __init__(self, clock: Clock = _utcnow, image_route: str = settings.IMAGE_ROUTE) -> None:
        self.clock = clock
        self.image_route = image_route

    # -----------------------------
    # Termes
    # -----------------------------
    def adapt_item(self, item: SearchTerm, allowed: Collection[str] = CANONICAL_CATEGORIES) -> SearchTerm:
        image_url = item.image_url
        if not _present(image_url):
            image_url = placeholder_image_url(item.term, route=self.image_route)
        timestamp = item.timestamp
        if not _present(timestamp):
            timestamp = self.clock().isoformat()
        return SearchTerm(
            id=item.id,
            term=item.term,
            volume=item.volume,
            category=validate_category(item.category, allowed),
            image_url=image_url,
            timestamp=timestamp,
        )

    def _adapt_optional(self, item: Optional[SearchTerm], allowed: Collection[str]) -> Optional[SearchTerm]:
        if item is None:
            return None
        return self.adapt_item(item, allowed)

    # -----------------------------
    # État de jeu
    # -----------------------------
    def to_canonical(self, legacy: LegacyGameState) -> CanonicalGameState:
        current = legacy.current_round
        round_ = current if current is not None and current >= 1 else 1
        return CanonicalGameState(
            game_id=legacy.game_id if legacy.game_id is not None else "",
            score=round_ - 1,
            round=round_,
            known_term=self._adapt_optional(legacy.known_term, CANONICAL_CATEGORIES),
            hidden_term=self._adapt_optional(legacy.hidden_term, CANONICAL_CATEGORIES),
            category=validate_category(legacy.category, CANONICAL_CATEGORIES),
            finished=legacy.finished,
            # pas assez d'information ici pour le calculer
            high_score=False,
        )

    def to_legacy(self, canonical: CanonicalGameState) -> LegacyGameState:
        return LegacyGameState(
            game_id=canonical.game_id,
            current_round=canonical.round,
            known_term=self._adapt_optional(canonical.known_term, LEGACY_CATEGORIES),
            hidden_term=self._adapt_optional(canonical.hidden_term, LEGACY_CATEGORIES),
            category=validate_category(canonical.category, LEGACY_CATEGORIES),
            started=True,
            finished=canonical.finished,
            winner=None,
            custom_term=None,
            used_terms=[],
            terms=[],
        )

    # -----------------------------
    # Joueurs
    # -----------------------------
    def to_canonical_player(self, player: LegacyPlayer) -> CanonicalPlayer:
        return CanonicalPlayer(
            uid=player.uid,
            name=player.name,
            score=player.score if player.score is not None else 0,
            high_scores=dict(player.high_scores) if player.high_scores is not None else {},
        )

    def to_legacy_player(self, player: CanonicalPlayer) -> LegacyPlayer:
        # uid (web) prioritaire, puis id (mobile); "" en dernier recours seulement
        if _present(player.uid):
            uid = player.uid
        elif _present(player.id):
            uid = player.id
        else:
            uid = ""
        return LegacyPlayer(
            uid=uid,
            name=player.name,
            score=player.score if player.score is not None else 0,
            high_scores=dict(player.high_scores) if player.high_scores is not None else {},
        )

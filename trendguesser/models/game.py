"""
Models / game.py
Rôle:
- Définir les deux représentations de l'état d'une partie TrendGuesser.

Schémas:
- `CanonicalGameState`: schéma partagé, consommé par le moteur de jeu et par toutes
  les surfaces clientes (round, score, termes connu/caché, catégorie, finished,
  highScore dérivé).
- `LegacyGameState`: schéma local du client web historique. Plus riche: started,
  winner, customTerm, usedTerms (termes déjà servis) et le pool `terms` de la session.

Notes:
- Les deux schémas ne sont pas isomorphes: le canonique stocke score ET round, le
  legacy ne stocke que `currentRound` (le score se déduit: round - 1).
- `customTerm` est `str | None`: toujours sérialisé en `null`, jamais omis.
- Les termes peuvent être absents (`None`) tant que la manche n'a pas démarré.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from trendguesser.models.term import DEFAULT_CATEGORY, SearchTerm


class CanonicalGameState(BaseModel):
    """État canonique (moteur de jeu / réseau)."""

    game_id: str = ""
    score: int = 0
    round: int = Field(default=1, ge=1)
    known_term: Optional[SearchTerm] = None
    hidden_term: Optional[SearchTerm] = None
    category: str = DEFAULT_CATEGORY
    finished: bool = False
    high_score: bool = False

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LegacyGameState(BaseModel):
    """État local du client legacy (historique de session inclus)."""

    game_id: Optional[str] = None
    current_round: Optional[int] = 1
    known_term: Optional[SearchTerm] = None
    hidden_term: Optional[SearchTerm] = None
    category: str = DEFAULT_CATEGORY
    started: bool = False
    finished: bool = False
    winner: Optional[str] = None
    custom_term: Optional[str] = None
    used_terms: List[str] = Field(default_factory=list)  # ids déjà servis, dans l'ordre
    terms: List[SearchTerm] = Field(default_factory=list)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

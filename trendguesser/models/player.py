"""
Models / player.py
Rôle:
- Définir un joueur dans les deux schémas (canonique partagé / legacy web).

Champs:
- canonique: `id` et `uid` sont tous deux optionnels (mobile vs web), `date`/`timestamp`
  sont deux variantes du même horodatage.
- legacy: `uid` toujours présent (clé des entrées de score dans le document de partie).
- `score` peut être absent (None) : l'adaptateur le ramène à 0.
- `highScores`: {catégorie: meilleur score}.
"""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CanonicalPlayer(BaseModel):
    """Joueur côté moteur / clients partagés."""

    id: Optional[str] = None
    uid: Optional[str] = None
    name: str = ""
    score: Optional[int] = None
    date: Optional[str] = None
    timestamp: Optional[str] = None
    high_scores: Optional[Dict[str, int]] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LegacyPlayer(BaseModel):
    """Joueur côté client legacy."""
    uid: str
    name: str = ""
    score: Optional[int] = None
    high_scores: Optional[Dict[str, int]] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

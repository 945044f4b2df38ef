"""
Models / term.py
Rôle:
- Définir un terme de recherche (`SearchTerm`) et les deux jeux de catégories.

Notes:
- Le schéma canonique (moteur de jeu, clients web + mobile) connaît `general`,
  le schéma legacy (client web historique) ne le connaît pas.
- `category` reste un `str` dans les modèles: la validation est faite par
  l'adaptateur au moment de la traduction, jamais à la désérialisation.
- `volume` doit être un nombre fini et positif (NaN/inf refusés).
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SearchCategory(str, Enum):
    """Catégories reconnues par le schéma canonique."""

    ANIMALS = "animals"
    CELEBRITIES = "celebrities"
    EVERYTHING = "everything"
    LATEST = "latest"
    GAMES = "games"
    GAMING = "gaming"
    SPORTS = "sports"
    ENTERTAINMENT = "entertainment"
    NEWS = "news"
    TECHNOLOGY = "technology"
    SNACKS = "snacks"
    CARS = "cars"
    PETS = "pets"
    LANDMARKS = "landmarks"
    FASHION = "fashion"
    QUESTIONS = "questions"
    CUSTOM = "custom"
    GENERAL = "general"


DEFAULT_CATEGORY = SearchCategory.EVERYTHING.value

CANONICAL_CATEGORIES = frozenset(c.value for c in SearchCategory)
# Le client legacy n'a jamais eu `general`
LEGACY_CATEGORIES = CANONICAL_CATEGORIES - {SearchCategory.GENERAL.value}


class SearchTerm(BaseModel):
    """Un terme comparé pendant une manche (label + volume de recherche)."""

    id: str
    term: str
    volume: float = Field(ge=0, allow_inf_nan=False)
    category: str = DEFAULT_CATEGORY
    image_url: Optional[str] = None
    timestamp: Optional[str] = None  # ISO-8601

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

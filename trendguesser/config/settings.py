"""
Configuration de l'application (Settings)
=========================================

Rôle
----
- Centraliser les paramètres du backend TrendGuesser (nom, host/port, stockage,
  leaderboard, images de remplacement, CORS).
- Les valeurs par défaut conviennent pour un environnement de dev local.
- Les variables peuvent être surchargées via un fichier `.env` ou l'environnement.

Intégrations
------------
- `pydantic-settings` charge automatiquement les variables d'env et `.env`.
- `create_app()` lit `settings` pour construire le store JSON par défaut.
- `IMAGE_ROUTE` sert aussi à l'adaptateur de schémas (URL d'image synthétisée).

Exemples de `.env`
------------------
APP_NAME="TrendGuesser Backend (Staging)"
PORT=8080
DATA_DIR="/var/opt/trendguesser/data"
LEADERBOARD_LIMIT=20
LOG_LEVEL="DEBUG"
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os


class Settings(BaseSettings):
    # Nom du service (apparaît dans /health)
    APP_NAME: str = "TrendGuesser Backend"
    # Bind réseau (Uvicorn)
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Niveau de log appliqué par create_app()
    LOG_LEVEL: str = "INFO"

    # Répertoire des documents persistés (games/, players.json, leaderboard.json)
    # Par défaut: <repo>/trendguesser/data
    DATA_DIR: str = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")

    # Nombre d'entrées renvoyées par /leaderboard
    LEADERBOARD_LIMIT: int = 10

    # Route locale utilisée pour les images synthétisées (`/image?term=...`)
    IMAGE_ROUTE: str = "/image"
    # Fournisseur d'images de remplacement (seed déterministe)
    IMAGE_PROVIDER_URL: str = "https://picsum.photos"

    # Frontends autorisés (CORS)
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


# Instance unique importable partout : `settings`
settings = Settings()

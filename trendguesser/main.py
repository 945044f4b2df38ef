"""
Application FastAPI — Point d'entrée
====================================

Rôle
----
- `create_app(store)` instancie l'app, configure le logging et le CORS pour le front,
  range le store de documents dans `app.state.store` et monte les routeurs.
- `app` : instance par défaut (store JSON sous `settings.DATA_DIR`), pour uvicorn.

Notes
-----
- Le store est injecté : les tests montent une app sur un store temporaire.
- ⚠️ Le middleware CORS doit être ajouté AVANT les include_router.
"""
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trendguesser.config.settings import settings
from trendguesser.routes.games import router as games_router
from trendguesser.routes.health import router as health_router
from trendguesser.routes.highscores import router as highscores_router
from trendguesser.routes.image import router as image_router
from trendguesser.routes.leaderboard import router as leaderboard_router
from trendguesser.services.game_store import GameStore, JsonGameStore

logger = logging.getLogger(__name__)


def create_app(store: Optional[GameStore] = None) -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title=settings.APP_NAME)
    app.state.store = store or JsonGameStore(settings.DATA_DIR)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(games_router)
    app.include_router(leaderboard_router)
    app.include_router(highscores_router)
    app.include_router(image_router)
    app.include_router(health_router)

    @app.get("/")
    async def root():
        """Ping basique : permet de vérifier que l'app tourne."""
        return {"ok": True, "service": "trendguesser-backend"}

    @app.on_event("startup")
    async def list_routes():
        """Liste les routes (path + méthodes) dans les logs (diagnostic)."""
        logger.info("== Registered routes ==")
        for r in app.routes:
            methods = getattr(r, "methods", None)
            logger.info("%s %s", r.path, sorted(methods) if methods else "")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

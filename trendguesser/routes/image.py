"""
Module routes/image.py
Rôle:
- Cible des URLs d'image synthétisées par l'adaptateur (`/image?term=...`).
- Redirige vers une image de remplacement déterministe (même terme -> même image).
"""
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import RedirectResponse

from trendguesser.config.settings import settings
from trendguesser.routes.http_errors import ROUTED_METHODS, method_not_allowed
from trendguesser.services.images import provider_image_url

router = APIRouter(tags=["image"])


@router.api_route(settings.IMAGE_ROUTE, methods=ROUTED_METHODS)
async def image(
    request: Request,
    term: Optional[str] = Query(default=None),
    width: int = Query(default=800, gt=0, le=4000),
    height: int = Query(default=600, gt=0, le=4000),
):
    if request.method not in ("GET", "HEAD"):
        raise method_not_allowed(request.method, ("GET",))
    if not term:
        raise HTTPException(status_code=400, detail="term_required")
    return RedirectResponse(provider_image_url(term, width, height), status_code=307)

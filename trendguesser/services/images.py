"""
Images de remplacement pour les termes sans `imageUrl`.

- placeholder_image_url(term)  -> URL locale déterministe (`/image?term=...`)
- image_seed(term)             -> graine stable dérivée du label
- provider_image_url(term,...) -> URL du fournisseur (seed/width/height)
"""
from urllib.parse import quote

from trendguesser.config.settings import settings


def placeholder_image_url(term: str, route: str = settings.IMAGE_ROUTE) -> str:
    return f"{route}?term={quote(term, safe='')}"


def image_seed(term: str) -> int:
    """Somme pondérée des code points: même label -> même image."""
    return sum(ord(char) * (i + 1) for i, char in enumerate(term))


def provider_image_url(
    term: str,
    width: int = 800,
    height: int = 600,
    base_url: str = settings.IMAGE_PROVIDER_URL,
) -> str:
    return f"{base_url.rstrip('/')}/seed/{image_seed(term)}/{width}/{height}"

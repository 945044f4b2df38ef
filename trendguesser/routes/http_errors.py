"""
Traduction des erreurs de service en réponses HTTP.

- InvalidRequestError -> 400 (detail = code d'erreur)
- GameNotFoundError   -> 404
- méthode refusée     -> 405 + header `Allow`
- le reste            -> 500 générique; le détail part dans les logs, pas dans la réponse
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Sequence

from fastapi import HTTPException

from trendguesser.models.envelope import GameNotFoundError, InvalidRequestError

logger = logging.getLogger(__name__)

# Tous les verbes arrivent au handler, qui seul décide du 405 et de son `Allow`
ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def method_not_allowed(method: str, allowed: Sequence[str]) -> HTTPException:
    return HTTPException(
        status_code=405,
        detail=f"Method {method} Not Allowed",
        headers={"Allow": ", ".join(allowed)},
    )


@contextmanager
def service_errors(operation: str, **context) -> Iterator[None]:
    try:
        yield
    except HTTPException:
        raise
    except InvalidRequestError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except GameNotFoundError:
        raise HTTPException(status_code=404, detail="game_not_found")
    except Exception:
        logger.exception("%s failed %s", operation, context)
        raise HTTPException(status_code=500, detail="internal_server_error")

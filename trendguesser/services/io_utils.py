"""
Utilitaires IO JSON (rapides) basés sur orjson.
- read_json(Path)  → Any | None (None si fichier manquant)
- write_json(Path, data) → écriture atomique (fichier temporaire + replace)
- loads(bytes) → parse d'un corps de requête

Attention:
- orjson renvoie/attend des bytes; on lit/écrit en mode binaire.
- OPT_NON_STR_KEYS: les clés de document sont toujours des str, mais on tolère
  l'écriture de dicts issus de modèles (enum, int).
"""
import os
from pathlib import Path
from typing import Any

import orjson as json

JSONDecodeError = json.JSONDecodeError


def read_json(path: Path) -> Any:
    """Lit un fichier JSON (ou None s'il n'existe pas)."""
    if not path.exists():
        return None
    with path.open("rb") as f:
        return json.loads(f.read())


def write_json(path: Path, data: Any) -> None:
    """Écrit un fichier JSON sans jamais laisser de fichier tronqué."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    with tmp.open("wb") as f:
        f.write(json.dumps(data, option=json.OPT_NON_STR_KEYS))
    os.replace(tmp, path)


def loads(raw: bytes) -> Any:
    return json.loads(raw)

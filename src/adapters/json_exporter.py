"""Exportación JSON de los metadatos de un recurso.

Por qué JSON:
- Permite persistir la referencia resuelta (petición + headers) y volver a
  pedir el recurso más tarde sin depender de la CLI.
- El contenido en bytes no se embebe: se guarda aparte con `--output`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import Resource


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return repr(value)


def resource_to_dict(resource: Resource) -> dict[str, Any]:
    request = resource.reference.request
    return {
        "reference": {
            "request": {
                "method": request.method,
                "url": request.url,
                "headers": dict(request.headers),
                "body_size": len(request.body),
                "options": [[key, _jsonable(value)] for key, value in request.options],
            },
            "headers": dict(resource.reference.headers),
        },
        "content": {
            "type": resource.content.type,
            "size": len(resource.content.data),
        },
        "integrity": {
            "timestamp": resource.integrity.timestamp.isoformat(),
            "checksum": resource.integrity.checksum,
        },
    }


def export_resource_json(*, resource: Resource, output_path: Path) -> Path:
    """Exporta los metadatos de `resource` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = resource_to_dict(resource)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path

"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los modelos `frozen` garantizan que una referencia nunca se muta: cada
  override produce un descriptor nuevo.

Nota:
- Estos modelos describen *qué* es un recurso HTTP, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class RequestDescriptor(BaseModel):
    """Petición HTTP canónica, lista para entregarse al transporte.

    Reglas:
    - `url` se fija al parsear la referencia y ningún merge la modifica.
    - `options` es una lista ordenada de pares (clave, valor); el orden se
      conserva hasta el transporte.
    """

    model_config = ConfigDict(frozen=True)

    method: str | None = Field(
        default=None,
        description="Verbo HTTP. `None` hasta que el llamador lo defina (GET en open).",
    )
    url: str = Field(
        ...,
        description="URL absoluta del recurso.",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers de la petición (semánticamente sin orden).",
    )
    body: bytes = Field(
        default=b"",
        description="Cuerpo de la petición (bytes).",
    )
    options: list[tuple[str, Any]] = Field(
        default_factory=list,
        description="Overrides del transporte (p.ej. follow_redirects, timeout).",
    )

    @field_validator("body", mode="before")
    @classmethod
    def _empty_body(cls, value: Any) -> Any:
        return b"" if value is None else value

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str | None) -> str | None:
        return value.upper() if isinstance(value, str) else value


class ResolvedReference(BaseModel):
    """Referencia producida tras un fetch exitoso.

    Por qué existe:
    - Permite volver a pedir el recurso con la misma forma de petición.
    - Expone los headers observados para inspección sin volver a la red.
    """

    model_config = ConfigDict(frozen=True)

    request: RequestDescriptor = Field(
        ...,
        description="Petición efectivamente enviada (tras overrides y access gate).",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Snapshot de headers de la respuesta.",
    )


# Unión etiquetada: URL "fresca" (str) o par resuelto.
Reference = Union[str, ResolvedReference]


class Content(BaseModel):
    type: str = Field(..., min_length=1, description="Media type del contenido.")
    data: bytes = Field(default=b"", description="Bytes tal cual los devolvió el servidor.")


class Integrity(BaseModel):
    timestamp: datetime = Field(
        ...,
        description="Momento autoritativo del recurso (UTC), fijado en el fetch.",
    )
    checksum: str | None = Field(
        default=None,
        description="Hash del contenido. Este producer nunca lo calcula.",
    )


class Resource(BaseModel):
    """Recurso obtenido vía HTTP: contenido tipado + metadatos de integridad."""

    reference: ResolvedReference
    content: Content
    integrity: Integrity

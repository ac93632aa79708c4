"""Contrato de un producer de recursos.

Por qué Protocol:
- El framework anfitrión enruta referencias por esquema y solo necesita
  estas operaciones; cada producer concreto (HTTP, ficheros, ...) las
  implementa sin heredar de una base común.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.domain.models import Reference, Resource


@runtime_checkable
class ResourceProducer(Protocol):
    def schemes(self) -> tuple[str, ...]:
        """Esquemas URI que este producer sabe abrir."""

        ...

    async def open(self, reference: Reference, **opts: Any) -> Resource:
        """Obtiene el recurso. Lanza `ResxHTTPError` en fallos esperados."""

        ...

    def alike(self, a: Reference, b: Reference) -> bool:
        """True si ambas referencias producirían la misma petición."""

        ...

    def source(self, reference: Reference) -> Reference | None:
        ...

    def resource_uri(self, reference: Reference) -> str:
        ...

    def resource_attributes(self, reference: Reference) -> dict[str, str]:
        ...

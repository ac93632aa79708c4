"""Contrato del transporte HTTP.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El producer no sabe si habla con httpx real, un MockTransport o un stub
  de tests: solo necesita `send`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx

from core.domain.models import RequestDescriptor


@runtime_checkable
class HTTPTransport(Protocol):
    """Contrato mínimo para enviar una petición.

    Reglas de diseño:
    - `send` es asíncrono porque hace I/O.
    - Sin reintentos ni lógica propia de redirects: eso se pide vía `options`.
    - Un fallo de red se propaga como `httpx.HTTPError` (o `httpx.InvalidURL`).
    """

    async def send(self, request: RequestDescriptor) -> httpx.Response:
        """Envía `request` y devuelve la respuesta completa (cuerpo leído)."""

        ...

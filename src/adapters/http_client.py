"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, User-Agent y logging para todas las peticiones.
- Facilita testeo: se puede inyectar un `httpx.MockTransport` o sustituir
  el transporte completo por un stub.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import AppSettings
from core.domain.models import RequestDescriptor

logger = logging.getLogger(__name__)

# Claves de `RequestDescriptor.options` que httpx acepta por petición.
SUPPORTED_OPTIONS = frozenset(
    {"follow_redirects", "timeout", "params", "cookies", "auth", "extensions"}
)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las peticiones se comporten igual.
    - Los redirects quedan desactivados: se piden por petición vía `options`.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )


def request_kwargs(request: RequestDescriptor) -> dict[str, Any]:
    """Traduce `options` a kwargs de `AsyncClient.request`.

    Las claves repetidas se resuelven a favor de la última; las que httpx no
    entiende se descartan con un warning.
    """

    kwargs: dict[str, Any] = {}
    for key, value in request.options:
        if key not in SUPPORTED_OPTIONS:
            logger.warning("Dropping unsupported transport option %r for %s", key, request.url)
            continue
        kwargs[key] = value
    return kwargs


class HttpxTransport:
    """Implementación de `HTTPTransport` sobre `httpx.AsyncClient`.

    Un cliente por envío: la conexión se libera al terminar cada llamada y no
    hay estado compartido entre peticiones concurrentes.

    Headers: el cliente aporta `User-Agent` y `Accept: */*` solo como
    defaults; si el descriptor define esos headers, httpx envía los del
    descriptor. Los defaults no se copian al descriptor, así que la
    referencia resuelta guarda lo que pidió el llamador, no cada byte enviado.

    Un header que httpx no puede codificar se reporta como
    `httpx.LocalProtocolError`, igual que cualquier otro fallo de transporte.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def send(self, request: RequestDescriptor) -> httpx.Response:
        method = request.method or "GET"
        logger.debug("Sending %s %s", method, request.url)
        async with build_async_client(self._settings, transport=self._transport) as client:
            try:
                response = await client.request(
                    method,
                    request.url,
                    headers=request.headers,
                    content=request.body,
                    **request_kwargs(request),
                )
            except UnicodeEncodeError as exc:
                # httpx codifica los headers en ASCII al construir la petición.
                raise httpx.LocalProtocolError(f"cannot encode request: {exc}") from exc
        logger.debug("Received HTTP %s from %s", response.status_code, request.url)
        return response

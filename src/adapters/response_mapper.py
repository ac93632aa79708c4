"""Respuesta HTTP -> `Resource`.

Reglas:
- Éxito es exactamente un status en [200, 300).
- La referencia resultante siempre es la forma resuelta: la petición que de
  verdad se envió + el snapshot completo de headers de la respuesta.
- Este producer no calcula checksum.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

import httpx

from core.domain.errors import TransportFailureError, UnsuccessfulResponseError
from core.domain.models import Content, Integrity, RequestDescriptor, ResolvedReference, Resource
from core.domain.timestamp_mode import TimestampMode
from core.services.timestamps import resolve_timestamp, utcnow

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def is_success(response: httpx.Response) -> bool:
    return 200 <= response.status_code < 300


def to_resource(
    request: RequestDescriptor,
    response: httpx.Response,
    *,
    mode: TimestampMode | str | None = None,
    default_mode: TimestampMode = TimestampMode.default(),
    clock: Callable[[], datetime] = utcnow,
) -> Resource:
    """Mapea una respuesta 2xx a `Resource`.

    Raises:
        UnsuccessfulResponseError: para cualquier status fuera de [200, 300).
    """

    if not is_success(response):
        raise UnsuccessfulResponseError(response)

    # httpx canonicaliza los nombres a minúsculas y une duplicados con ", ".
    headers = dict(response.headers)

    return Resource(
        reference=ResolvedReference(request=request, headers=headers),
        content=Content(
            type=response.headers.get("Content-Type") or DEFAULT_CONTENT_TYPE,
            data=response.content,
        ),
        integrity=Integrity(
            timestamp=resolve_timestamp(headers, mode, default=default_mode, clock=clock),
            checksum=None,
        ),
    )


def format_transport_error(action: str, exc: Exception) -> TransportFailureError:
    message = str(exc) or type(exc).__name__
    return TransportFailureError(action, message)

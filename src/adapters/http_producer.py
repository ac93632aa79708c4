"""Producer HTTP/HTTPS.

Flujo de `open`:
    reference codec -> access gate -> transporte -> response mapper

Por qué en adapters:
- Es la pieza que hace I/O; el Core solo aporta traducción, política y
  resolución de timestamps.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.http_client import HttpxTransport
from adapters.response_mapper import format_transport_error, to_resource
from core.config import AppSettings
from core.domain.models import Reference, Resource
from core.domain.timestamp_mode import TimestampMode
from core.interfaces.producer import ResourceProducer
from core.interfaces.transport import HTTPTransport
from core.services.access_gate import authorize
from core.services.reference_codec import alike, to_request

logger = logging.getLogger(__name__)


class HTTPProducer(ResourceProducer):
    """Convierte referencias HTTP en recursos."""

    _schemes = ("https", "http")

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: HTTPTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport or HttpxTransport(self._settings)

    def schemes(self) -> tuple[str, ...]:
        return self._schemes

    async def open(self, reference: Reference, **opts: Any) -> Resource:
        """Obtiene `reference`.

        Opciones: `method` (GET por defecto), `headers`, `body`, `options`
        y `timestamp` (`server`/`client`, solo para esta llamada).

        Raises:
            InvalidReferenceError: la referencia no es HTTP.
            RestrictedRequestError: el access gate rechazó la petición.
            InternalError: status no-2xx o fallo de transporte.
        """

        mode = TimestampMode.coerce(opts.get("timestamp"))
        request, _ = to_request(reference, {"method": "GET", **opts})
        request = authorize(request, self._settings.access)

        try:
            response = await self._transport.send(request)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.debug("Transport failure for %s: %r", request.url, exc)
            raise format_transport_error("retrieve content", exc) from exc

        return to_resource(
            request,
            response,
            mode=mode,
            default_mode=self._settings.timestamp,
        )

    def alike(self, a: Reference, b: Reference) -> bool:
        return alike(a, b)

    def source(self, reference: Reference) -> Reference | None:
        # Un recurso HTTP no deriva de otro; solo validamos la referencia.
        to_request(reference)
        return None

    def resource_uri(self, reference: Reference) -> str:
        request, _ = to_request(reference)
        return request.url

    def resource_attributes(self, reference: Reference) -> dict[str, str]:
        _, headers = to_request(reference)
        return headers

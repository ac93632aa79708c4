"""Access gate: punto único de política antes de enviar una petición.

Por qué aquí:
- Corre con el descriptor ya construido y antes del transporte, así ninguna
  forma de referencia puede saltárselo.
- Allow-lists de dominios, opciones forzadas (p.ej. follow_redirects) o
  headers obligatorios viven en el callback, no en el producer.
"""

from __future__ import annotations

import logging
from typing import Callable

from core.domain.errors import RestrictedRequestError
from core.domain.models import RequestDescriptor

logger = logging.getLogger(__name__)

AccessCallback = Callable[[RequestDescriptor], "RequestDescriptor | None"]


def authorize(request: RequestDescriptor, access: AccessCallback | None) -> RequestDescriptor:
    """Devuelve la petición a enviar (posiblemente reescrita por `access`).

    Sin callback configurado se permite todo.

    Raises:
        RestrictedRequestError: si el callback devuelve `None`.
        TypeError: si el callback devuelve algo que no es un `RequestDescriptor`.
    """

    if access is None:
        return request

    decision = access(request)
    if decision is None:
        logger.warning("Access policy rejected %s %s", request.method, request.url)
        raise RestrictedRequestError(request)
    if not isinstance(decision, RequestDescriptor):
        raise TypeError(
            f"access callback must return RequestDescriptor or None, got {type(decision).__name__}"
        )
    if decision != request:
        logger.debug("Access policy rewrote request for %s", request.url)
    return decision

"""Resolución del timestamp autoritativo de un recurso.

Modos:
- `server`: `Last-Modified`, si no `Date`; si falta o no parsea, reloj local.
- `client`: siempre el reloj local en el momento del mapeo.

Se resuelve una única vez, al mapear la respuesta; el recurso lo lleva fijo.
"""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Callable, Mapping

import httpx

from core.domain.timestamp_mode import TimestampMode


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_http_date(value: str | None) -> datetime | None:
    """Parsea un HTTP-date (IMF-fixdate, RFC 850 o asctime) a UTC."""

    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _header_timestamp(value: str, clock: Callable[[], datetime]) -> datetime:
    parsed = parse_http_date(value)
    return parsed if parsed is not None else clock()


def resolve_timestamp(
    headers: Mapping[str, str],
    mode: TimestampMode | str | None = None,
    *,
    default: TimestampMode = TimestampMode.default(),
    clock: Callable[[], datetime] = utcnow,
) -> datetime:
    """Deriva el timestamp de `headers` según `mode` (o `default` si es None)."""

    resolved = TimestampMode.coerce(mode) or default
    if resolved is TimestampMode.CLIENT:
        return clock()

    lookup = httpx.Headers(headers)
    # Si Last-Modified existe pero es inválido, no se consulta Date.
    last_modified = lookup.get("Last-Modified")
    if last_modified is not None:
        return _header_timestamp(last_modified, clock)
    date = lookup.get("Date")
    if date is not None:
        return _header_timestamp(date, clock)
    return clock()

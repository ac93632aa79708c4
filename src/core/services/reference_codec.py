"""Reference codec: reference + overrides -> canonical request.

This module owns the translation between the two reference shapes the
producer accepts and the `RequestDescriptor` handed to the transport:

- a fresh URL string builds a new descriptor from the overrides;
- a `ResolvedReference` replays its stored descriptor with the overrides
  merged on top, carrying its header snapshot through unchanged.

It also implements the equivalence predicate (`alike`), which is purely
structural and never touches the network.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

from core.domain.errors import InvalidReferenceError
from core.domain.models import Reference, RequestDescriptor, ResolvedReference

logger = logging.getLogger(__name__)

Overrides = Mapping[str, Any] | Iterable[tuple[str, Any]]
OptionPairs = Sequence[tuple[str, Any]] | Mapping[str, Any]

_REPLACED_FIELDS = ("method", "body")


def _pairs(overrides: Overrides | None) -> list[tuple[str, Any]]:
    if overrides is None:
        return []
    if isinstance(overrides, Mapping):
        return list(overrides.items())
    return [(key, value) for key, value in overrides]


def _lookup(overrides: list[tuple[str, Any]], key: str) -> Any:
    # Como en un keyword list, gana la primera aparición.
    for name, value in overrides:
        if name == key:
            return value
    return None


def merge_headers(old: Mapping[str, str], new: Mapping[str, str] | None) -> dict[str, str]:
    """Unión superficial; en conflicto gana `new`."""

    merged = dict(old)
    merged.update(new or {})
    return merged


def merge_options(old: OptionPairs, new: OptionPairs | None) -> list[tuple[str, Any]]:
    """Merge ordenado por clave.

    Los pares de `old` cuya clave aparece en `new` se descartan y los de `new`
    se añaden al final en su orden. Las claves presentes solo en `old`
    conservan su posición.
    """

    old_pairs = _pairs(old)
    new_pairs = _pairs(new)
    replaced = {key for key, _ in new_pairs}
    return [(key, value) for key, value in old_pairs if key not in replaced] + new_pairs


def _replace(request: RequestDescriptor, **changes: Any) -> RequestDescriptor:
    # model_copy no valida; reconstruimos para normalizar igual que el constructor.
    return RequestDescriptor.model_validate({**request.model_dump(), **changes})


def update_request(request: RequestDescriptor, overrides: Overrides | None) -> RequestDescriptor:
    """Aplica `overrides` de izquierda a derecha sobre una copia de `request`.

    `url` nunca se toca; las claves desconocidas se ignoran.
    """

    for key, value in _pairs(overrides):
        if key in _REPLACED_FIELDS:
            request = _replace(request, **{key: value})
        elif key == "headers":
            request = _replace(request, headers=merge_headers(request.headers, value))
        elif key == "options":
            request = _replace(request, options=merge_options(request.options, value))
        else:
            logger.debug("Ignoring request override %r", key)
    return request


def to_request(
    reference: Reference,
    overrides: Overrides | None = None,
) -> tuple[RequestDescriptor, dict[str, str]]:
    """Construye `(descriptor, header_snapshot)` para `reference`.

    Raises:
        InvalidReferenceError: si `reference` no es una URL ni una referencia resuelta.
    """

    pairs = _pairs(overrides)

    if isinstance(reference, ResolvedReference):
        return update_request(reference.request, pairs), dict(reference.headers)

    if isinstance(reference, str):
        request = RequestDescriptor(
            method=_lookup(pairs, "method"),
            url=reference,
            headers=dict(_lookup(pairs, "headers") or {}),
            body=_lookup(pairs, "body") or b"",
            options=_pairs(_lookup(pairs, "options")),
        )
        return request, {}

    raise InvalidReferenceError("not an HTTP reference")


def alike(a: Reference, b: Reference) -> bool:
    """True si `a` y `b` producen exactamente la misma petición.

    Los snapshots de headers no participan: dos fetches del mismo recurso con
    respuestas distintas siguen siendo referencias equivalentes.
    """

    try:
        request_a, _ = to_request(a)
        request_b, _ = to_request(b)
    except InvalidReferenceError:
        return False
    return request_a == request_b

"""Errores clasificados del producer HTTP.

Por qué una jerarquía:
- El llamador distingue referencia inválida, petición restringida y fallo
  interno con `except` sin inspeccionar mensajes.
- Los dos fallos internos (HTTP no-2xx y fallo de transporte) comparten
  `InternalError` pero conservan la información que los diferencia.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from core.domain.models import RequestDescriptor


class ResxHTTPError(Exception):
    """Base de todos los errores esperados del producer."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class InvalidReferenceError(ResxHTTPError):
    def __init__(self, reason: str = "not an HTTP reference") -> None:
        super().__init__(reason)


class RestrictedRequestError(InvalidReferenceError):
    """El access gate rechazó la petición; nunca salió del proceso."""

    def __init__(self, request: "RequestDescriptor") -> None:
        super().__init__("restricted request")
        self.request = request


class InternalError(ResxHTTPError):
    pass


class UnsuccessfulResponseError(InternalError):
    """El servidor respondió fuera de [200, 300); la respuesta cruda va adjunta."""

    def __init__(self, response: "httpx.Response") -> None:
        super().__init__(f"unexpected HTTP status {response.status_code}")
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code


class TransportFailureError(InternalError):
    def __init__(self, action: str, message: str) -> None:
        super().__init__(f"failed to {action} due to: {message}")
        self.action = action

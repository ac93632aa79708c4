from __future__ import annotations

from typing import Any

import httpx
import pytest

from core.domain.models import RequestDescriptor


class RecordingTransport:
    """Stub de `HTTPTransport`: devuelve una respuesta fija o lanza un error."""

    def __init__(self, response: httpx.Response | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[RequestDescriptor] = []

    async def send(self, request: RequestDescriptor) -> httpx.Response:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def make_response(
    status: int = 200,
    *,
    headers: dict[str, str] | None = None,
    content: bytes = b"",
    url: str = "http://example.com/data.csv",
) -> httpx.Response:
    return httpx.Response(status, headers=headers or {}, content=content, request=httpx.Request("GET", url))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    for name in ("RESX_HTTP_TIMESTAMP", "RESX_HTTP_ACCESS", "RESX_HTTP_USER_AGENT", "RESX_HTTP_HTTP_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)

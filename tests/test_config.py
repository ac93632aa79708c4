import json

import pytest
from pydantic import ValidationError

from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.timestamp_mode import TimestampMode


def test_defaults():
    settings = AppSettings()

    assert settings.timestamp is TimestampMode.default() is TimestampMode.SERVER
    assert settings.access is None
    assert settings.http_timeout_seconds == 20.0


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("RESX_HTTP_TIMESTAMP", "client")
    monkeypatch.setenv("RESX_HTTP_HTTP_TIMEOUT_SECONDS", "7.5")

    settings = AppSettings()

    assert settings.timestamp is TimestampMode.CLIENT
    assert settings.http_timeout_seconds == 7.5


def test_access_accepts_import_path(monkeypatch):
    monkeypatch.setenv("RESX_HTTP_ACCESS", "json:dumps")

    assert AppSettings().access is json.dumps


def test_access_accepts_callable():
    def allow(request):
        return request

    assert AppSettings(access=allow).access is allow


def test_invalid_timestamp_mode_is_rejected():
    with pytest.raises(ValidationError):
        AppSettings(timestamp="sometimes")


def test_write_user_env_vars_merges_existing(tmp_path):
    first = write_user_env_vars({"RESX_HTTP_TIMESTAMP": "client"})
    second = write_user_env_vars({"RESX_HTTP_USER_AGENT": "me/1", "RESX_HTTP_ACCESS": None})

    assert first == second == get_user_env_file()
    assert str(first).startswith(str(tmp_path))
    lines = first.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert "RESX_HTTP_TIMESTAMP=client" in lines
    assert "RESX_HTTP_USER_AGENT=me/1" in lines
    assert not any(line.startswith("RESX_HTTP_ACCESS") for line in lines)

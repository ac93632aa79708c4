import httpx
import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from adapters.http_client import HttpxTransport
from adapters.http_producer import HTTPProducer
from core.config import get_user_env_file

runner = CliRunner()


@pytest.fixture
def seen(monkeypatch):
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path == "/missing":
            return httpx.Response(404)
        return httpx.Response(200, headers={"Content-Type": "text/csv"}, content=b"x,y\n1,2")

    def build(settings):
        return HTTPProducer(settings, transport=HttpxTransport(settings, transport=httpx.MockTransport(handler)))

    monkeypatch.setattr(cli_main, "_build_producer", build)
    return requests


def test_fetch_prints_resource_and_writes_files(seen, tmp_path):
    content_path = tmp_path / "data.csv"
    json_path = tmp_path / "data.json"

    result = runner.invoke(
        cli_main.app,
        [
            "fetch",
            "http://example.com/data.csv",
            "-H",
            "Accept: text/csv",
            "--timestamp",
            "client",
            "-o",
            str(content_path),
            "--json",
            str(json_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "text/csv" in result.output
    assert content_path.read_bytes() == b"x,y\n1,2"
    assert json_path.exists()
    assert seen[0].headers["Accept"] == "text/csv"


def test_fetch_with_body_and_method(seen):
    result = runner.invoke(cli_main.app, ["fetch", "http://example.com/items", "-X", "post", "-d", "a=1"])

    assert result.exit_code == 0, result.output
    assert seen[0].method == "POST"
    assert seen[0].content == b"a=1"


def test_fetch_reports_http_errors(seen):
    result = runner.invoke(cli_main.app, ["fetch", "http://example.com/missing"])

    assert result.exit_code == 1
    assert "404" in result.output


def test_fetch_rejects_malformed_header(seen):
    result = runner.invoke(cli_main.app, ["fetch", "http://example.com/data.csv", "-H", "no-colon"])

    assert result.exit_code != 0
    assert seen == []


def test_alike_command():
    assert runner.invoke(cli_main.app, ["alike", "http://a", "http://a"]).exit_code == 0
    assert runner.invoke(cli_main.app, ["alike", "http://a", "http://b"]).exit_code == 1


def test_doctor_setup_timestamp_persists_mode():
    result = runner.invoke(cli_main.app, ["doctor", "setup-timestamp", "client"])

    assert result.exit_code == 0, result.output
    assert "RESX_HTTP_TIMESTAMP=client" in get_user_env_file().read_text(encoding="utf-8")

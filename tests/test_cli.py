from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from rebilly import MockTransport
from rebilly.cli import build_parser, run_cli

from conftest import json_response


@pytest.fixture
def env_file(tmp_path: Path) -> str:
    path = tmp_path / ".env"
    path.write_text("REBILLY_API_KEY=cli-key\nREBILLY_BASE_URL=https://api.test\n", encoding="utf-8")
    return str(path)


def test_get_prints_resource_as_json(env_file: str, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REBILLY_API_KEY", raising=False)
    monkeypatch.delenv("REBILLY_BASE_URL", raising=False)
    transport = MockTransport()
    transport.add("GET", "v2.1/websites/w1", json_response(200, {"id": "w1", "name": "Shop"}))
    out = io.StringIO()

    code = run_cli(
        ["get", "websites/{websiteId}", "--param", "websiteId=w1", "--env-file", env_file],
        transport=transport,
        stdout=out,
    )

    assert code == 0
    assert json.loads(out.getvalue()) == {"id": "w1", "name": "Shop"}
    assert transport.requests[0].headers["REB-APIKEY"] == "cli-key"


def test_post_sends_data_and_delete_prints_nothing(env_file: str) -> None:
    transport = MockTransport()
    transport.add("POST", "v2.1/websites", json_response(201, {"id": "w2"}))
    transport.add("DELETE", "v2.1/websites/w2", json_response(204))
    out = io.StringIO()

    assert run_cli(["post", "websites", "--data", '{"name": "n"}', "--env-file", env_file], transport=transport, stdout=out) == 0
    assert run_cli(["DELETE", "websites/w2", "--env-file", env_file, "--trace"], transport=transport, stdout=out) == 0

    assert json.loads(transport.requests[0].body) == {"name": "n"}
    assert json.loads(out.getvalue()) == {"id": "w2"}


def test_api_errors_return_exit_code_one(env_file: str) -> None:
    transport = MockTransport()
    transport.add("POST", "v2.1/websites", json_response(422, {"details": ["name is required"]}))

    assert run_cli(["get", "websites/missing", "--env-file", env_file], transport=transport) == 1
    assert run_cli(["post", "websites", "--env-file", env_file], transport=transport) == 1


def test_missing_api_key_returns_exit_code_one(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REBILLY_API_KEY", raising=False)
    code = run_cli(["get", "websites", "--env-file", str(tmp_path / "none.env")], transport=MockTransport())
    assert code == 1


def test_set_overrides_environment(env_file: str) -> None:
    transport = MockTransport(handler=lambda request: json_response(200, []))
    run_cli(
        ["get", "websites", "--env-file", env_file, "--set", "REBILLY_API_KEY=overridden"],
        transport=transport,
        stdout=io.StringIO(),
    )
    assert transport.requests[0].headers["REB-APIKEY"] == "overridden"


def test_parser_rejects_malformed_pairs() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["get", "websites", "--param", "novalue"])

from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from rebilly import Configuration, ConfigurationError, load_configuration, load_env_file
from rebilly.core.config import SANDBOX_HOST, layer_environment, read_env_file


def test_env_file_fills_missing_values(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\nREBILLY_API_KEY=from-file\nexport REBILLY_TIMEOUT_SECONDS='12'\n",
        encoding="utf-8",
    )

    config = load_configuration(env_file=str(env_file), base={})

    assert config.api_key == "from-file"
    assert config.timeout_seconds == 12.0
    assert config.base_url is None


def test_base_environment_wins_over_file_and_overrides_win_over_all(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("REBILLY_API_KEY=file\nREBILLY_BASE_URL=https://file.test\n", encoding="utf-8")

    config = load_configuration(
        env_file=str(env_file),
        base={"REBILLY_API_KEY": "environ"},
        overrides={"REBILLY_BASE_URL": "https://override.test/"},
    )

    assert config.api_key == "environ"
    assert config.base_url == "https://override.test"


def test_keyword_parameters_take_precedence() -> None:
    config = load_configuration(
        env_file=None,
        base={"REBILLY_API_KEY": "environ"},
        overrides={"REBILLY_API_KEY": "override"},
        api_key="explicit",
        sandbox=True,
    )
    assert config.api_key == "explicit"
    assert config.base_url == SANDBOX_HOST


def test_explicit_base_url_beats_sandbox_flag() -> None:
    config = load_configuration(env_file=None, base={}, base_url="https://x.test", sandbox=True)
    assert config.base_url == "https://x.test"


def test_missing_api_key_is_left_for_the_client() -> None:
    config = load_configuration(env_file=None, base={})
    assert config.api_key is None
    assert config.transport is None


@pytest.mark.parametrize(
    "values",
    [
        {"REBILLY_TIMEOUT_SECONDS": "soon"},
        {"REBILLY_TIMEOUT_SECONDS": "0"},
        {"REBILLY_BASE_URL": "  "},
        {"REBILLY_BASE_URL": "ftp://api.test"},
    ],
)
def test_invalid_values_raise(values: dict) -> None:
    with pytest.raises(ConfigurationError):
        Configuration.from_mapping(values)


def test_from_options_accepts_camel_case_and_rejects_unknown() -> None:
    config = Configuration.from_options({"apiKey": "k", "baseUrl": "https://a.test/"})
    assert (config.api_key, config.base_url) == ("k", "https://a.test")
    with pytest.raises(ConfigurationError):
        Configuration.from_options({"apiSecret": "x"})


def test_configuration_is_immutable() -> None:
    config = Configuration(api_key="k")
    with pytest.raises(FrozenInstanceError):
        config.api_key = "other"  # type: ignore[misc]


def test_load_env_file_preserves_existing_keys(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("A=file\nB=file\n", encoding="utf-8")
    environ = {"A": "kept"}

    merged = load_env_file(str(env_file), environ=environ)

    assert merged == {"A": "kept", "B": "file"}


def test_layer_environment_skips_missing_file(tmp_path: Path) -> None:
    layered = layer_environment(env_file=str(tmp_path / "missing.env"), base={"X": "1"})
    assert layered == {"X": "1"}


def test_read_env_file_handles_quotes_exports_and_junk(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "export A=\"quoted value\"\n# B=skipped\nnot a pair\n=orphan\nC = plain \nD='x\n",
        encoding="utf-8",
    )

    assert read_env_file(str(env_file)) == {"A": "quoted value", "C": "plain", "D": "'x"}

"""
Configuration objects and helpers for API clients.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Mapping, MutableMapping, Optional

from .errors import ConfigurationError

if TYPE_CHECKING:
    from .http import Transport

__all__ = [
    "BASE_HOST",
    "CURRENT_VERSION",
    "ConfigurationError",
    "Configuration",
    "SANDBOX_HOST",
    "layer_environment",
    "load_configuration",
    "load_env_file",
    "read_env_file",
]

BASE_HOST = "https://api.rebilly.com"
SANDBOX_HOST = "https://api-sandbox.rebilly.com"
CURRENT_VERSION = "v2.1"

_DEFAULT_TIMEOUT_SECONDS = 30.0

_PARAMETER_TO_ENV_KEY = {
    "api_key": "REBILLY_API_KEY",
    "base_url": "REBILLY_BASE_URL",
    "sandbox": "REBILLY_SANDBOX",
    "timeout_seconds": "REBILLY_TIMEOUT_SECONDS",
}

_OPTION_ALIASES = {
    "apiKey": "api_key",
    "baseUrl": "base_url",
    "httpHandler": "transport",
    "timeout": "timeout_seconds",
}

_TRUTHY = {"1", "true", "yes", "on"}


def read_env_file(path: str) -> Dict[str, str]:
    """
    Parse a ``.env`` file into a dict; a missing file yields ``{}``.

    Blank lines and ``#`` comments are ignored, an ``export `` prefix is
    dropped and matching single or double quotes around a value are removed.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return {}

    parsed: Dict[str, str] = {}
    with env_path.open(encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if line.startswith("export "):
                line = line[7:].lstrip()
            if not line or line[0] == "#":
                continue
            key, sep, value = line.partition("=")
            if not sep or not key.strip():
                continue
            value = value.strip()
            if len(value) >= 2 and value[0] in "\"'" and value[-1] == value[0]:
                value = value[1:-1]
            parsed[key.strip()] = value
    return parsed


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """Copy keys from ``path`` into ``environ`` (default ``os.environ``) without overwriting."""
    target = os.environ if environ is None else environ
    for key, value in read_env_file(path).items():
        if key not in target:
            target[key] = value
    return dict(target)


def layer_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Merge settings sources, lowest priority first: ``env_file``, ``base``
    (``os.environ`` when omitted), then ``overrides``.
    """
    layered: Dict[str, str] = read_env_file(env_file) if env_file is not None else {}
    layered.update(os.environ if base is None else base)
    layered.update(overrides or {})
    return layered


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _collect_parameter_overrides(explicit: Mapping[str, Any]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


def _normalize_base_url(raw_url: str) -> str:
    value = raw_url.strip().rstrip("/")
    if not value:
        raise ConfigurationError("REBILLY_BASE_URL must not be empty")
    if not value.startswith(("http://", "https://")):
        raise ConfigurationError(f"REBILLY_BASE_URL must be an http(s) URL, got '{raw_url}'")
    return value


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"REBILLY_TIMEOUT_SECONDS must be a number, got '{raw}'"
        ) from exc
    if timeout <= 0:
        raise ConfigurationError("REBILLY_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class Configuration:
    """
    Settings consumed by :class:`rebilly.core.client.Client`.

    ``base_url`` and ``transport`` may be left as ``None``; the client fills in
    the production host and the default transport when it is constructed.
    """

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    transport: Optional["Transport"] = None
    timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "Configuration":
        """Build a configuration from a plain mapping of options."""
        values: Dict[str, Any] = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in ("api_key", "base_url", "transport", "timeout_seconds"):
                raise ConfigurationError(f"Unknown configuration option '{key}'")
            values[name] = value
        if values.get("base_url") is not None:
            values["base_url"] = _normalize_base_url(values["base_url"])
        return cls(**values)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "Configuration":
        api_key = values.get("REBILLY_API_KEY")
        if api_key is not None:
            api_key = api_key.strip() or None

        base_raw = values.get("REBILLY_BASE_URL")
        if base_raw is not None:
            base_url: Optional[str] = _normalize_base_url(base_raw)
        elif values.get("REBILLY_SANDBOX", "").strip().lower() in _TRUTHY:
            base_url = SANDBOX_HOST
        else:
            base_url = None

        timeout_seconds = _parse_timeout(
            values.get("REBILLY_TIMEOUT_SECONDS", str(_DEFAULT_TIMEOUT_SECONDS))
        )

        return cls(
            api_key=api_key,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        sandbox: Optional[bool] = None,
        timeout_seconds: Optional[float | str] = None,
    ) -> "Configuration":
        parameter_overrides = _collect_parameter_overrides(
            {
                "api_key": api_key,
                "base_url": base_url,
                "sandbox": sandbox,
                "timeout_seconds": timeout_seconds,
            }
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        return cls.from_mapping(
            layer_environment(env_file=env_file, base=base, overrides=merged_overrides)
        )


def load_configuration(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    sandbox: Optional[bool] = None,
    timeout_seconds: Optional[float | str] = None,
) -> Configuration:
    """
    Convenience wrapper that mirrors :meth:`Configuration.from_env`.

    The configuration can be provided entirely through environment variables,
    a ``.env`` file, direct keyword arguments, or any combination of the three.
    """
    return Configuration.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        api_key=api_key,
        base_url=base_url,
        sandbox=sandbox,
        timeout_seconds=timeout_seconds,
    )

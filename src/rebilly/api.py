"""
Public, high-level helpers for interacting with the Rebilly API.

Besides :func:`create_client`, this module keeps an optional process-wide
default client used by the verb shortcuts below and by services constructed
without an explicit client. Nothing registers itself implicitly: call
:func:`set_default_client` (or ``create_client(..., set_default=True)``) first
and :func:`reset_default_client` when done.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Any, Mapping, Optional, Union

from .core.client import Client
from .core.config import Configuration, load_configuration
from .core.http import Transport
from .core.uri import Uri

__all__ = [
    "create_client",
    "delete",
    "get",
    "get_default_client",
    "head",
    "patch",
    "post",
    "put",
    "reset_default_client",
    "set_default_client",
]

_default_client: Optional[Client] = None
_default_lock = threading.Lock()


def set_default_client(client: Client) -> None:
    global _default_client
    with _default_lock:
        _default_client = client


def get_default_client() -> Client:
    with _default_lock:
        client = _default_client
    if client is None:
        raise RuntimeError("The client is not initialized")
    return client


def reset_default_client() -> None:
    global _default_client
    with _default_lock:
        _default_client = None


def create_client(
    *,
    config: Optional[Configuration] = None,
    transport: Optional[Transport] = None,
    set_default: bool = False,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    sandbox: Optional[bool] = None,
    timeout_seconds: Optional[float | str] = None,
) -> Client:
    """
    Construct a :class:`Client`.

    Callers can either supply a ready-made :class:`Configuration` or let the
    helper assemble one from environment data. ``transport`` replaces the
    default ``requests`` based transport in both cases.
    """
    if config is not None:
        extras = (overrides, base, api_key, base_url, sandbox, timeout_seconds)
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built Configuration or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_configuration(
            env_file=env_file,
            overrides=overrides,
            base=base,
            api_key=api_key,
            base_url=base_url,
            sandbox=sandbox,
            timeout_seconds=timeout_seconds,
        )

    if transport is not None:
        cfg = replace(cfg, transport=transport)

    client = Client(cfg)
    if set_default:
        set_default_client(client)
    return client


def get(path: Union[str, Uri], params: Any = None, headers: Optional[Mapping[str, str]] = None) -> Any:
    return get_default_client().get(path, params, headers)


def head(path: Union[str, Uri], params: Any = None, headers: Optional[Mapping[str, str]] = None) -> None:
    get_default_client().head(path, params, headers)


def delete(path: Union[str, Uri], params: Any = None, headers: Optional[Mapping[str, str]] = None) -> None:
    get_default_client().delete(path, params, headers)


def post(payload: Any, path: Union[str, Uri], params: Any = None, headers: Optional[Mapping[str, str]] = None) -> Any:
    return get_default_client().post(payload, path, params, headers)


def put(payload: Any, path: Union[str, Uri], params: Any = None, headers: Optional[Mapping[str, str]] = None) -> Any:
    return get_default_client().put(payload, path, params, headers)


def patch(payload: Any, path: Union[str, Uri], params: Any = None, headers: Optional[Mapping[str, str]] = None) -> Any:
    return get_default_client().patch(payload, path, params, headers)

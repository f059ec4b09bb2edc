"""
Request pipeline for the Rebilly REST API.
"""

from __future__ import annotations

import datetime
import decimal
import json
import logging
from dataclasses import replace
from typing import Any, Dict, Mapping, Optional, Union

from requests.structures import CaseInsensitiveDict

from ..schema import default_schema
from .config import BASE_HOST, CURRENT_VERSION, Configuration
from .errors import ConfigurationError, HttpError, InvalidResponseError, raise_for_status
from .factory import ResourceFactory
from .http import Request, RequestsTransport, Response, Transport
from .middleware import ApiKeyAuthentication, BaseUri, CompositeMiddleware, MiddlewareLike
from .resources import Collection, Resource
from .uri import Uri, build_uri

__all__ = ["Client", "decode_body", "serialize_payload"]

_BODYLESS_RESULT_METHODS = ("HEAD", "DELETE")


def _json_default(value: Any) -> Any:
    if isinstance(value, (Resource, Collection)):
        return value.json_serialize()
    if isinstance(value, decimal.Decimal):
        return str(value)
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_payload(payload: Any) -> bytes:
    """
    Encode ``payload`` as a JSON object.

    ``None`` and empty payloads become ``{}``; a top-level sequence or
    :class:`Collection` is turned into an object keyed by position.
    """
    if payload is None:
        data: Any = {}
    elif isinstance(payload, Resource):
        data = payload.json_serialize()
    elif isinstance(payload, Mapping):
        data = dict(payload)
    elif isinstance(payload, Collection):
        data = {str(index): value for index, value in enumerate(payload.json_serialize())}
    elif isinstance(payload, (list, tuple)):
        data = {str(index): value for index, value in enumerate(payload)}
    else:
        raise TypeError(f"Cannot serialize payload of type {type(payload).__name__}")
    return json.dumps(data, default=_json_default).encode("utf-8")


def decode_body(response: Response) -> Any:
    """Decode a JSON body; an empty body (or ``null``) yields ``{}``."""
    if not response.body or not response.body.strip():
        return {}
    try:
        content = json.loads(response.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidResponseError(
            f"Failed to parse JSON from response with status {response.status_code}"
        ) from exc
    return {} if content is None else content


def _normalize_params(params: Any) -> Dict[str, Any]:
    if params is None:
        return {}
    if isinstance(params, Resource):
        return params.to_dict()
    return dict(params)


class Client:
    """
    Sends requests through a middleware chain and resolves typed resources.

    The chain always starts with :class:`BaseUri` and
    :class:`ApiKeyAuthentication`; more links can be added with
    :meth:`attach`. The client itself is the terminal handler and hands the
    request to the configured transport.

    A client holds no per-call state, so it can be shared between threads as
    long as its transport can. The default :class:`RequestsTransport` wraps a
    single ``requests.Session`` and should not be shared.
    """

    def __init__(
        self,
        config: Union[Configuration, Mapping[str, Any]],
        *,
        factory: Optional[ResourceFactory] = None,
    ) -> None:
        if not isinstance(config, Configuration):
            config = Configuration.from_options(config)

        if not config.api_key:
            raise ConfigurationError("Missing API key")

        base_url = (config.base_url or BASE_HOST).rstrip("/")
        if base_url != config.base_url:
            config = replace(config, base_url=base_url)

        if config.transport is None:
            config = replace(config, transport=RequestsTransport(timeout=config.timeout_seconds))

        self.config = config
        self.transport: Transport = config.transport

        self.factory = factory or ResourceFactory(default_schema())

        self.middleware = CompositeMiddleware()
        self.middleware.attach(BaseUri(self.create_uri(f"{config.base_url}/{CURRENT_VERSION}")))
        self.middleware.attach(ApiKeyAuthentication(config.api_key))
        self._handler = self.middleware.compose(self)

    def attach(self, middleware: MiddlewareLike) -> "Client":
        """Append ``middleware`` to the chain, inside the built-in links."""
        self.middleware.attach(middleware)
        self._handler = self.middleware.compose(self)
        return self

    def __call__(self, request: Request) -> Response:
        return self.transport.send(request)

    def send(
        self,
        method: str,
        payload: Any,
        path: Union[str, Uri],
        params: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Union[Resource, Collection, None]:
        """
        Send one request and return the resolved resource.

        Raises the errors of :mod:`rebilly.core.errors` for 4xx/5xx responses.
        ``HEAD`` and ``DELETE`` calls return ``None``.
        """
        method = method.upper()
        params = _normalize_params(params)
        body = serialize_payload(payload)

        request_headers = CaseInsensitiveDict(dict(headers or {}))
        request_headers["Content-Type"] = "application/json"

        uri = self.create_uri(path, params)
        request = self.create_request(method, uri, body, request_headers)

        logging.debug("Dispatching %s %s", method, uri)
        response = self._handler(request)

        try:
            raise_for_status(response)
        except HttpError as exc:
            logging.info("%s %s failed: %s", method, uri, exc)
            raise

        if method in _BODYLESS_RESULT_METHODS:
            return None

        location = response.header("Location")
        resolved = self.create_uri(location) if location else request.uri

        content = decode_body(response)
        return self.factory.create(resolved.path, content, response.headers)

    def get(self, path: Union[str, Uri], params: Any = None, headers: Optional[Mapping[str, str]] = None) -> Any:
        return self.send("GET", None, path, params, headers)

    def head(self, path: Union[str, Uri], params: Any = None, headers: Optional[Mapping[str, str]] = None) -> None:
        self.send("HEAD", None, path, params, headers)

    def delete(self, path: Union[str, Uri], params: Any = None, headers: Optional[Mapping[str, str]] = None) -> None:
        self.send("DELETE", None, path, params, headers)

    def post(self, payload: Any, path: Union[str, Uri], params: Any = None, headers: Optional[Mapping[str, str]] = None) -> Any:
        return self.send("POST", payload, path, params, headers)

    def put(self, payload: Any, path: Union[str, Uri], params: Any = None, headers: Optional[Mapping[str, str]] = None) -> Any:
        return self.send("PUT", payload, path, params, headers)

    def patch(self, payload: Any, path: Union[str, Uri], params: Any = None, headers: Optional[Mapping[str, str]] = None) -> Any:
        return self.send("PATCH", payload, path, params, headers)

    def create_request(
        self,
        method: str,
        uri: Uri,
        payload: Optional[bytes],
        headers: Optional[Mapping[str, str]] = None,
    ) -> Request:
        return Request(
            method=method,
            uri=uri,
            headers=CaseInsensitiveDict(dict(headers or {})),
            body=payload,
        )

    def create_uri(self, uri: Union[str, Uri], params: Optional[Mapping[str, Any]] = None) -> Uri:
        return build_uri(uri, params)

"""
HTTP primitives: request/response value objects and pluggable transports.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from http import HTTPStatus
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Union

import requests
from requests.structures import CaseInsensitiveDict

from .errors import TransportError
from .uri import Uri

__all__ = [
    "MockTransport",
    "Request",
    "RequestsTransport",
    "Response",
    "Transport",
]


def _headers(values: Optional[Mapping[str, str]] = None) -> CaseInsensitiveDict:
    return CaseInsensitiveDict(dict(values or {}))


@dataclass(frozen=True)
class Request:
    method: str
    uri: Uri
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: Optional[bytes] = None

    def with_uri(self, uri: Uri) -> "Request":
        return replace(self, uri=uri)

    def with_header(self, name: str, value: str) -> "Request":
        headers = _headers(self.headers)
        headers[name] = value
        return replace(self, headers=headers)


@dataclass(frozen=True)
class Response:
    status_code: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: bytes = b""
    reason: str = ""

    @property
    def reason_phrase(self) -> str:
        if self.reason:
            return self.reason
        try:
            return HTTPStatus(self.status_code).phrase
        except ValueError:
            return ""

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name)


class Transport:
    """
    Sends a fully-formed request and returns the raw response.

    Implementations must raise :class:`TransportError` when no response could
    be obtained.
    """

    def send(self, request: Request) -> Response:
        raise NotImplementedError("Transport.send must be implemented by subclasses")


class RequestsTransport(Transport):
    """
    Default transport backed by :class:`requests.Session`.

    Redirects are never followed so ``Location`` headers reach the client.
    A ``requests.Session`` is not documented as thread-safe, so share one
    instance per thread.
    """

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ) -> None:
        self.session = session or requests.Session()
        self.timeout = float(timeout)

    def send(self, request: Request) -> Response:
        if not request.uri.is_absolute:
            raise TransportError(f"Cannot send a request to relative URI '{request.uri}'")
        try:
            raw = self.session.request(
                request.method,
                str(request.uri),
                headers=dict(request.headers),
                data=request.body,
                allow_redirects=False,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{request.method} {request.uri} failed: {exc}") from exc

        return Response(
            status_code=raw.status_code,
            headers=_headers(raw.headers),
            body=raw.content or b"",
            reason=raw.reason or "",
        )


MockHandler = Callable[[Request], Response]


class MockTransport(Transport):
    """
    Transport returning canned responses keyed by ``(METHOD, path)``.

    ``path`` is compared against the full request path with surrounding
    slashes removed, e.g. ``"v2.1/bank-accounts/1"``. Unknown requests are
    delegated to ``handler`` or answered with a 404. Every request is recorded
    in :attr:`requests` and the transport is safe for concurrent use.
    """

    def __init__(
        self,
        responses: Optional[Mapping[Tuple[str, str], Union[Response, MockHandler]]] = None,
        *,
        handler: Optional[MockHandler] = None,
    ) -> None:
        self._responses: Dict[Tuple[str, str], Union[Response, MockHandler]] = {}
        for (method, path), response in (responses or {}).items():
            self.add(method, path, response)
        self.handler = handler
        self.requests: List[Request] = []
        self._lock = threading.Lock()

    def add(self, method: str, path: str, response: Union[Response, MockHandler]) -> None:
        self._responses[(method.upper(), path.strip("/"))] = response

    def send(self, request: Request) -> Response:
        with self._lock:
            self.requests.append(request)
        key = (request.method.upper(), request.uri.path.strip("/"))
        canned = self._responses.get(key)
        if canned is None:
            if self.handler is not None:
                return self.handler(request)
            logging.debug("No canned response for %s %s", *key)
            return Response(status_code=404)
        if isinstance(canned, Response):
            return canned
        return canned(request)

    @property
    def last_request(self) -> Optional[Request]:
        with self._lock:
            return self.requests[-1] if self.requests else None

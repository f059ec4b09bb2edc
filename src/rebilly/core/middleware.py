"""
Composable request/response interceptors.

A middleware receives the request and the next handler in the chain. It may
rewrite the request before delegating, inspect the response afterwards, or
return a response of its own without delegating at all. The innermost handler
is the transport call.
"""

from __future__ import annotations

import logging
import time
from functools import partial
from typing import Callable, Iterator, List, Union

from .http import Request, Response
from .uri import Uri

__all__ = [
    "API_KEY_HEADER",
    "ApiKeyAuthentication",
    "BaseUri",
    "CompositeMiddleware",
    "Handler",
    "Middleware",
    "RequestLogger",
]

API_KEY_HEADER = "REB-APIKEY"

Handler = Callable[[Request], Response]


class Middleware:
    """Pass-through link; subclasses override :meth:`handle`."""

    def handle(self, request: Request, next_handler: Handler) -> Response:
        return next_handler(request)


MiddlewareLike = Union[Middleware, Callable[[Request, Handler], Response]]


def _invoke(link: MiddlewareLike, next_handler: Handler, request: Request) -> Response:
    if isinstance(link, Middleware):
        return link.handle(request, next_handler)
    return link(request, next_handler)


class CompositeMiddleware(Middleware):
    """
    Ordered list of middleware that itself behaves as one middleware.

    The first attached link runs first and sees the request before any later
    link; responses travel back in reverse order.
    """

    def __init__(self) -> None:
        self._links: List[MiddlewareLike] = []

    def attach(self, link: MiddlewareLike) -> "CompositeMiddleware":
        if not isinstance(link, Middleware) and not callable(link):
            raise TypeError(f"Middleware must be callable, got {type(link).__name__}")
        self._links.append(link)
        return self

    def __iter__(self) -> Iterator[MiddlewareLike]:
        return iter(list(self._links))

    def __len__(self) -> int:
        return len(self._links)

    def compose(self, terminal: Handler) -> Handler:
        """Fold the links around ``terminal`` into a single handler."""
        handler = terminal
        for link in reversed(self._links):
            handler = partial(_invoke, link, handler)
        return handler

    def handle(self, request: Request, next_handler: Handler) -> Response:
        return self.compose(next_handler)(request)


class BaseUri(Middleware):
    """Makes relative request URIs absolute against ``base``."""

    def __init__(self, base: Uri) -> None:
        self.base = base

    def handle(self, request: Request, next_handler: Handler) -> Response:
        if not request.uri.is_absolute:
            request = request.with_uri(request.uri.resolve(self.base))
        return next_handler(request)


class ApiKeyAuthentication(Middleware):
    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def handle(self, request: Request, next_handler: Handler) -> Response:
        return next_handler(request.with_header(API_KEY_HEADER, self.api_key))


class RequestLogger(Middleware):
    """Logs every exchange that passes through it."""

    def __init__(self, level: int = logging.DEBUG) -> None:
        self.level = level

    def handle(self, request: Request, next_handler: Handler) -> Response:
        started = time.monotonic()
        response = next_handler(request)
        elapsed_ms = (time.monotonic() - started) * 1000
        logging.log(
            self.level,
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.uri,
            response.status_code,
            elapsed_ms,
        )
        return response

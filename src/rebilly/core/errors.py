"""
Error taxonomy raised by the request pipeline.

Every failure surfaces as a subclass of :class:`RebillyError` so integrators
can catch the whole family at once or react to a specific kind.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from .http import Response

__all__ = [
    "ClientError",
    "ConfigurationError",
    "FieldError",
    "HttpError",
    "InvalidResponseError",
    "NotFoundError",
    "RebillyError",
    "ServerError",
    "TransportError",
    "UnprocessableEntityError",
    "raise_for_status",
]


class RebillyError(Exception):
    """Base class for every error raised by the SDK."""


class ConfigurationError(RebillyError):
    """Raised when the supplied configuration is invalid."""


class TransportError(RebillyError):
    """Raised when the request never produced an HTTP response."""


class InvalidResponseError(RebillyError):
    """Raised when a successful response carries a body that is not JSON."""


class HttpError(RebillyError):
    """Base class for errors derived from the response status code."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = int(status_code)
        self.reason = reason
        message = f"{self.status_code} {reason}".strip()
        super().__init__(message)


class NotFoundError(HttpError):
    def __init__(self) -> None:
        super().__init__(404, "Not Found")


@dataclass(frozen=True)
class FieldError:
    """A single validation failure reported by the API."""

    field: Optional[str]
    error: str

    @classmethod
    def from_raw(cls, raw: Any) -> "FieldError":
        if isinstance(raw, dict):
            message = raw.get("error", raw.get("message", ""))
            return cls(field=raw.get("field"), error=str(message))
        return cls(field=None, error=str(raw))


class UnprocessableEntityError(HttpError):
    """422 response; ``details`` lists the field level failures."""

    def __init__(self, details: Optional[List[Any]] = None) -> None:
        super().__init__(422, "Unprocessable Entity")
        self.details: List[FieldError] = [
            FieldError.from_raw(item) for item in (details or [])
        ]

    def __str__(self) -> str:
        if not self.details:
            return super().__str__()
        joined = "; ".join(
            f"{item.field}: {item.error}" if item.field else item.error
            for item in self.details
        )
        return f"{super().__str__()}: {joined}"


class ClientError(HttpError):
    """Any other 4xx response."""


class ServerError(HttpError):
    """Any 5xx response."""


def _unprocessable_details(response: "Response") -> List[Any]:
    if not response.body:
        return []
    try:
        content = json.loads(response.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return []
    if not isinstance(content, dict):
        return []
    details = content.get("details")
    if details is None:
        return []
    if not isinstance(details, list):
        return [details]
    return details


def raise_for_status(response: "Response") -> None:
    """
    Map an error status code to its typed exception.

    404 and 422 are checked before the generic ranges; anything below 400 is
    a success and returns without raising.
    """
    status = response.status_code
    if status == 404:
        raise NotFoundError()
    if status == 422:
        raise UnprocessableEntityError(_unprocessable_details(response))
    if status >= 500:
        raise ServerError(status, response.reason_phrase)
    if status >= 400:
        raise ClientError(status, response.reason_phrase)

"""
Core primitives that implement the request pipeline.
"""

from .config import (
    BASE_HOST,
    CURRENT_VERSION,
    SANDBOX_HOST,
    Configuration,
    layer_environment,
    load_configuration,
    load_env_file,
    read_env_file,
)
from .errors import (
    ClientError,
    ConfigurationError,
    FieldError,
    HttpError,
    InvalidResponseError,
    NotFoundError,
    RebillyError,
    ServerError,
    TransportError,
    UnprocessableEntityError,
    raise_for_status,
)
from .http import MockTransport, Request, RequestsTransport, Response, Transport
from .middleware import (
    ApiKeyAuthentication,
    BaseUri,
    CompositeMiddleware,
    Middleware,
    RequestLogger,
)
from .resources import Collection, Entity, Resource, attribute, embedded
from .uri import Uri, build_uri
from .factory import ResourceFactory, Schema
from .paginator import Paginator
from .client import Client

__all__ = [
    "ApiKeyAuthentication",
    "BASE_HOST",
    "BaseUri",
    "CURRENT_VERSION",
    "Client",
    "ClientError",
    "Collection",
    "CompositeMiddleware",
    "Configuration",
    "ConfigurationError",
    "Entity",
    "FieldError",
    "HttpError",
    "InvalidResponseError",
    "Middleware",
    "MockTransport",
    "NotFoundError",
    "Paginator",
    "RebillyError",
    "Request",
    "RequestLogger",
    "RequestsTransport",
    "Resource",
    "ResourceFactory",
    "Response",
    "SANDBOX_HOST",
    "Schema",
    "ServerError",
    "Transport",
    "TransportError",
    "UnprocessableEntityError",
    "Uri",
    "attribute",
    "build_uri",
    "embedded",
    "layer_environment",
    "load_configuration",
    "load_env_file",
    "read_env_file",
    "raise_for_status",
]

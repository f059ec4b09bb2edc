"""
Public facade for the Rebilly API client package.

The module re-exports the most useful pieces for integrators so they can
``from rebilly import ...`` without navigating the package.
"""

from .api import (
    create_client,
    get_default_client,
    reset_default_client,
    set_default_client,
)
from .core import (
    BASE_HOST,
    CURRENT_VERSION,
    SANDBOX_HOST,
    ApiKeyAuthentication,
    BaseUri,
    Client,
    ClientError,
    Collection,
    CompositeMiddleware,
    Configuration,
    ConfigurationError,
    Entity,
    FieldError,
    HttpError,
    InvalidResponseError,
    Middleware,
    MockTransport,
    NotFoundError,
    Paginator,
    RebillyError,
    Request,
    RequestLogger,
    RequestsTransport,
    Resource,
    ResourceFactory,
    Response,
    Schema,
    ServerError,
    Transport,
    TransportError,
    UnprocessableEntityError,
    Uri,
    build_uri,
    load_configuration,
    load_env_file,
)
from .entities import (
    ApiTracking,
    BankAccount,
    CheckoutPage,
    LeadSource,
    Organization,
    TrackingUser,
    Website,
)
from .schema import default_schema
from .services import (
    ApiTrackingService,
    BankAccountService,
    CheckoutPageService,
    LeadSourceService,
    OrganizationService,
    Service,
    WebsiteService,
)

__version__ = "0.1.0"

__all__ = (
    "ApiKeyAuthentication",
    "ApiTracking",
    "ApiTrackingService",
    "BASE_HOST",
    "BankAccount",
    "BankAccountService",
    "BaseUri",
    "CURRENT_VERSION",
    "CheckoutPage",
    "CheckoutPageService",
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
    "LeadSource",
    "LeadSourceService",
    "Middleware",
    "MockTransport",
    "NotFoundError",
    "Organization",
    "OrganizationService",
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
    "Service",
    "TrackingUser",
    "Transport",
    "TransportError",
    "UnprocessableEntityError",
    "Uri",
    "Website",
    "WebsiteService",
    "build_uri",
    "create_client",
    "default_schema",
    "get_default_client",
    "load_configuration",
    "load_env_file",
    "reset_default_client",
    "set_default_client",
)

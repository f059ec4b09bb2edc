"""
Per-resource services.

Services only know their URL templates; every call goes through
:meth:`rebilly.core.client.Client.send`, and errors raised there reach the
caller unchanged.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from .api import get_default_client
from .core.client import Client
from .core.paginator import Paginator
from .core.resources import Collection, Resource
from .entities import (
    ApiTracking,
    BankAccount,
    CheckoutPage,
    LeadSource,
    Organization,
    Website,
)

__all__ = [
    "ApiTrackingService",
    "BankAccountService",
    "CheckoutPageService",
    "LeadSourceService",
    "OrganizationService",
    "Service",
    "WebsiteService",
]

Payload = Union[Mapping[str, Any], Resource]


class Service:
    """
    Base class for resource services.

    Without an explicit client the process-wide default client is used.
    """

    def __init__(self, client: Optional[Client] = None) -> None:
        self._client = client

    @property
    def client(self) -> Client:
        return self._client if self._client is not None else get_default_client()


class BankAccountService(Service):
    def paginator(self, params: Optional[Mapping[str, Any]] = None) -> Paginator:
        return Paginator(self.client, "bank-accounts", params)

    def search(self, params: Optional[Mapping[str, Any]] = None) -> Collection:
        return self.client.get("bank-accounts", params)

    def load(self, bank_account_id: str, params: Optional[Mapping[str, Any]] = None) -> BankAccount:
        return self.client.get(
            "bank-accounts/{bankAccountId}",
            {"bankAccountId": bank_account_id, **dict(params or {})},
        )

    def create(self, data: Payload, bank_account_id: Optional[str] = None) -> BankAccount:
        if bank_account_id is not None:
            return self.client.put(
                data,
                "bank-accounts/{bankAccountId}",
                {"bankAccountId": bank_account_id},
            )
        return self.client.post(data, "bank-accounts")

    def create_from_token(
        self,
        token: Union[str, Mapping[str, Any]],
        data: Payload,
        bank_account_id: Optional[str] = None,
    ) -> BankAccount:
        """Create a bank account from a payment token id or token object."""
        if isinstance(data, Resource):
            body = data.json_serialize()
        else:
            body = dict(data)
        body["token"] = token if isinstance(token, str) else token["token"]
        return self.create(body, bank_account_id)

    def update(self, bank_account_id: str, data: Payload) -> BankAccount:
        return self.client.patch(
            data,
            "bank-accounts/{bankAccountId}",
            {"bankAccountId": bank_account_id},
        )

    def deactivate(self, bank_account_id: str) -> BankAccount:
        return self.client.post(
            {},
            "bank-accounts/{bankAccountId}/deactivation",
            {"bankAccountId": bank_account_id},
        )


class WebsiteService(Service):
    def paginator(self, params: Optional[Mapping[str, Any]] = None) -> Paginator:
        return Paginator(self.client, "websites", params)

    def search(self, params: Optional[Mapping[str, Any]] = None) -> Collection:
        return self.client.get("websites", params)

    def load(self, website_id: str, params: Optional[Mapping[str, Any]] = None) -> Website:
        return self.client.get(
            "websites/{websiteId}",
            {"websiteId": website_id, **dict(params or {})},
        )

    def create(self, data: Payload, website_id: Optional[str] = None) -> Website:
        if website_id is not None:
            return self.client.put(data, "websites/{websiteId}", {"websiteId": website_id})
        return self.client.post(data, "websites")

    def update(self, website_id: str, data: Payload) -> Website:
        return self.client.put(data, "websites/{websiteId}", {"websiteId": website_id})

    def delete(self, website_id: str) -> None:
        self.client.delete("websites/{websiteId}", {"websiteId": website_id})


class OrganizationService(Service):
    def paginator(self, params: Optional[Mapping[str, Any]] = None) -> Paginator:
        return Paginator(self.client, "organizations", params)

    def search(self, params: Optional[Mapping[str, Any]] = None) -> Collection:
        return self.client.get("organizations", params)

    def load(self, organization_id: str, params: Optional[Mapping[str, Any]] = None) -> Organization:
        return self.client.get(
            "organizations/{organizationId}",
            {"organizationId": organization_id, **dict(params or {})},
        )

    def create(self, data: Payload, organization_id: Optional[str] = None) -> Organization:
        if organization_id is not None:
            return self.client.put(
                data,
                "organizations/{organizationId}",
                {"organizationId": organization_id},
            )
        return self.client.post(data, "organizations")

    def update(self, organization_id: str, data: Payload) -> Organization:
        return self.client.put(
            data,
            "organizations/{organizationId}",
            {"organizationId": organization_id},
        )

    def delete(self, organization_id: str) -> None:
        self.client.delete("organizations/{organizationId}", {"organizationId": organization_id})


class CheckoutPageService(Service):
    def paginator(self, params: Optional[Mapping[str, Any]] = None) -> Paginator:
        return Paginator(self.client, "checkout-pages", params)

    def search(self, params: Optional[Mapping[str, Any]] = None) -> Collection:
        return self.client.get("checkout-pages", params)

    def load(self, checkout_page_id: str, params: Optional[Mapping[str, Any]] = None) -> CheckoutPage:
        return self.client.get(
            "checkout-pages/{checkoutPageId}",
            {"checkoutPageId": checkout_page_id, **dict(params or {})},
        )

    def create(self, data: Payload, checkout_page_id: Optional[str] = None) -> CheckoutPage:
        if checkout_page_id is not None:
            return self.client.put(
                data,
                "checkout-pages/{checkoutPageId}",
                {"checkoutPageId": checkout_page_id},
            )
        return self.client.post(data, "checkout-pages")

    def update(self, checkout_page_id: str, data: Payload) -> CheckoutPage:
        return self.client.put(
            data,
            "checkout-pages/{checkoutPageId}",
            {"checkoutPageId": checkout_page_id},
        )

    def delete(self, checkout_page_id: str) -> None:
        self.client.delete("checkout-pages/{checkoutPageId}", {"checkoutPageId": checkout_page_id})


class LeadSourceService(Service):
    def paginator(self, params: Optional[Mapping[str, Any]] = None) -> Paginator:
        return Paginator(self.client, "lead-sources", params)

    def search(self, params: Optional[Mapping[str, Any]] = None) -> Collection:
        return self.client.get("lead-sources", params)

    def load(self, lead_source_id: str, params: Optional[Mapping[str, Any]] = None) -> LeadSource:
        return self.client.get(
            "lead-sources/{leadSourceId}",
            {"leadSourceId": lead_source_id, **dict(params or {})},
        )

    def create(self, data: Payload, lead_source_id: Optional[str] = None) -> LeadSource:
        if lead_source_id is not None:
            return self.client.put(
                data,
                "lead-sources/{leadSourceId}",
                {"leadSourceId": lead_source_id},
            )
        return self.client.post(data, "lead-sources")


class ApiTrackingService(Service):
    """Read-only access to the API request log."""

    def paginator(self, params: Optional[Mapping[str, Any]] = None) -> Paginator:
        return Paginator(self.client, "tracking/api", params)

    def search(self, params: Optional[Mapping[str, Any]] = None) -> Collection:
        return self.client.get("tracking/api", params)

    def load(self, log_id: str, params: Optional[Mapping[str, Any]] = None) -> ApiTracking:
        return self.client.get("tracking/api/{logId}", {"logId": log_id, **dict(params or {})})

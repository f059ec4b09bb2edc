"""
Typed entities returned by the API.

Fields map one-to-one to the JSON attributes of each resource; read-only
fields are assigned by the server.
"""

from __future__ import annotations

from .core.resources import Entity, attribute, embedded

__all__ = [
    "ApiTracking",
    "BankAccount",
    "CheckoutPage",
    "LeadSource",
    "Organization",
    "TrackingUser",
    "Website",
]


class BankAccount(Entity):
    customer_id = attribute("customerId")
    bank_name = attribute("bankName")
    routing_number = attribute("routingNumber")
    account_number = attribute("accountNumber")
    account_number_type = attribute("accountNumberType")
    account_type = attribute("accountType")
    billing_address = attribute("billingAddress")
    custom_fields = attribute("customFields")
    last4 = attribute("last4", writable=False)
    status = attribute("status", writable=False)
    created_time = attribute("createdTime", writable=False)
    updated_time = attribute("updatedTime", writable=False)

    def set_token(self, token: str) -> "BankAccount":
        """Create the account from a previously tokenized form."""
        return self.set_attribute("token", token)


class Website(Entity):
    name = attribute("name")
    url = attribute("url")
    service_phone = attribute("servicePhone")
    service_email = attribute("serviceEmail")
    checkout_page_uri = attribute("checkoutPageUri")
    custom_fields = attribute("customFields")
    created_time = attribute("createdTime", writable=False)
    updated_time = attribute("updatedTime", writable=False)


class Organization(Entity):
    name = attribute("name")
    address = attribute("address")
    address2 = attribute("address2")
    city = attribute("city")
    region = attribute("region")
    country = attribute("country")
    postal_code = attribute("postalCode")
    created_time = attribute("createdTime", writable=False)


class LeadSource(Entity):
    medium = attribute("medium")
    source = attribute("source")
    campaign = attribute("campaign")
    term = attribute("term")
    content = attribute("content")
    affiliate = attribute("affiliate")
    sub_affiliate = attribute("subAffiliate")
    sales_agent = attribute("salesAgent")
    click_id = attribute("clickId")
    path = attribute("path")
    referrer = attribute("referrer")
    ip_address = attribute("ipAddress")
    customer_id = attribute("customerId")
    created_time = attribute("createdTime", writable=False)


class CheckoutPage(Entity):
    name = attribute("name")
    uri_path = attribute("uriPath")
    plan_id = attribute("planId")
    website_id = attribute("websiteId")
    redirect_url = attribute("redirectUrl")
    redirect_timeout = attribute("redirectTimeout")
    is_active = attribute("isActive")
    allow_custom_customer_id = attribute("allowCustomCustomerId")
    created_time = attribute("createdTime", writable=False)


class TrackingUser(Entity):
    email = attribute("email", writable=False)
    first_name = attribute("firstName", writable=False)
    last_name = attribute("lastName", writable=False)


class ApiTracking(Entity):
    """One logged API call. Everything is read-only."""

    status = attribute("status", writable=False)
    url = attribute("url", writable=False)
    route = attribute("route", writable=False)
    method = attribute("method", writable=False)
    request = attribute("request", writable=False)
    response = attribute("response", writable=False)
    duration = attribute("duration", writable=False)
    created_time = attribute("createdTime", writable=False)
    user = embedded("user", TrackingUser)

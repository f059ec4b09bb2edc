"""
Path templates of the shipped resources and the entity each one yields.

Collection paths map to the type of their items.
"""

from __future__ import annotations

from typing import Dict, Type

from .core.factory import Schema
from .core.resources import Entity
from .entities import (
    ApiTracking,
    BankAccount,
    CheckoutPage,
    LeadSource,
    Organization,
    Website,
)

__all__ = ["ROUTES", "default_schema"]

ROUTES: Dict[str, Type[Entity]] = {
    "bank-accounts": BankAccount,
    "bank-accounts/{bankAccountId}": BankAccount,
    "bank-accounts/{bankAccountId}/deactivation": BankAccount,
    "checkout-pages": CheckoutPage,
    "checkout-pages/{checkoutPageId}": CheckoutPage,
    "customers/{customerId}/lead-source": LeadSource,
    "lead-sources": LeadSource,
    "lead-sources/{leadSourceId}": LeadSource,
    "organizations": Organization,
    "organizations/{organizationId}": Organization,
    "tracking/api": ApiTracking,
    "tracking/api/{logId}": ApiTracking,
    "websites": Website,
    "websites/{websiteId}": Website,
}


def default_schema() -> Schema:
    return Schema(ROUTES)

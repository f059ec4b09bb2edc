from __future__ import annotations

import json
from urllib.parse import parse_qsl

import pytest

from rebilly import (
    ApiTracking,
    ApiTrackingService,
    BankAccount,
    BankAccountService,
    CheckoutPageService,
    Client,
    LeadSourceService,
    MockTransport,
    OrganizationService,
    Paginator,
    Request,
    Website,
    WebsiteService,
    set_default_client,
)

from conftest import json_response


def test_bank_account_create_posts_without_id(client: Client, transport: MockTransport) -> None:
    transport.add(
        "POST",
        "v2.1/bank-accounts",
        json_response(201, {"id": "b1"}, headers={"Location": "/v2.1/bank-accounts/b1"}),
    )
    account = BankAccountService(client).create({"customerId": "c1"})
    assert isinstance(account, BankAccount)
    assert transport.requests[0].method == "POST"


def test_bank_account_create_puts_with_id(client: Client, transport: MockTransport) -> None:
    transport.add("PUT", "v2.1/bank-accounts/b2", json_response(201, {"id": "b2"}))
    BankAccountService(client).create(BankAccount({"customerId": "c1"}), "b2")
    assert json.loads(transport.requests[0].body) == {"customerId": "c1"}


def test_bank_account_create_from_token(client: Client, transport: MockTransport) -> None:
    transport.add("POST", "v2.1/bank-accounts", json_response(201, {"id": "b3"}))
    service = BankAccountService(client)

    service.create_from_token("tok-1", {"customerId": "c1"})
    service.create_from_token({"token": "tok-2"}, BankAccount({"customerId": "c2"}))

    bodies = [json.loads(request.body) for request in transport.requests]
    assert bodies == [
        {"customerId": "c1", "token": "tok-1"},
        {"customerId": "c2", "token": "tok-2"},
    ]


def test_bank_account_update_and_deactivate(client: Client, transport: MockTransport) -> None:
    transport.add("PATCH", "v2.1/bank-accounts/b1", json_response(200, {"id": "b1"}))
    transport.add(
        "POST",
        "v2.1/bank-accounts/b1/deactivation",
        json_response(201, {"id": "b1", "status": "inactive"}),
    )
    service = BankAccountService(client)

    service.update("b1", {"bankName": "New"})
    deactivated = service.deactivate("b1")

    assert [r.method for r in transport.requests] == ["PATCH", "POST"]
    assert transport.requests[1].body == b"{}"
    assert deactivated.status == "inactive"


def test_load_merges_params_into_query(client: Client, transport: MockTransport) -> None:
    transport.add("GET", "v2.1/websites/w1", json_response(200, {"id": "w1"}))
    website = WebsiteService(client).load("w1", {"expand": "checkoutPage"})
    assert isinstance(website, Website)
    assert transport.requests[0].uri.query == "expand=checkoutPage"


@pytest.mark.parametrize(
    "service_type, base",
    [
        (WebsiteService, "websites"),
        (OrganizationService, "organizations"),
        (CheckoutPageService, "checkout-pages"),
    ],
)
def test_crud_services_use_expected_verbs(
    client: Client, transport: MockTransport, service_type: type, base: str
) -> None:
    transport.handler = lambda request: json_response(200, {"id": "x"})
    service = service_type(client)

    service.search({"limit": 5})
    service.create({"name": "n"})
    service.create({"name": "n"}, "x")
    service.update("x", {"name": "m"})
    service.delete("x")

    assert [(r.method, r.uri.path) for r in transport.requests] == [
        ("GET", f"/v2.1/{base}"),
        ("POST", f"/v2.1/{base}"),
        ("PUT", f"/v2.1/{base}/x"),
        ("PUT", f"/v2.1/{base}/x"),
        ("DELETE", f"/v2.1/{base}/x"),
    ]


def test_lead_source_and_tracking_services(client: Client, transport: MockTransport) -> None:
    transport.handler = lambda request: json_response(200, {"id": "1"})

    LeadSourceService(client).create({"medium": "email"}, "l1")
    log = ApiTrackingService(client).load("1")

    assert transport.requests[0].method == "PUT"
    assert isinstance(log, ApiTracking)


def test_service_falls_back_to_default_client(client: Client, transport: MockTransport) -> None:
    service = WebsiteService()
    with pytest.raises(RuntimeError, match="not initialized"):
        service.search()

    transport.add("GET", "v2.1/websites", json_response(200, []))
    set_default_client(client)
    assert len(service.search()) == 0


def _paged_handler(total: int):
    def handler(request: Request):
        query = dict(parse_qsl(request.uri.query))
        offset, limit = int(query["offset"]), int(query["limit"])
        ids = list(range(offset, min(offset + limit, total)))
        return json_response(
            200,
            [{"id": str(i)} for i in ids],
            headers={"Pagination-Total": str(total), "Pagination-Offset": str(offset), "Pagination-Limit": str(limit)},
        )

    return handler


def test_paginator_walks_all_pages(client: Client, transport: MockTransport) -> None:
    transport.handler = _paged_handler(5)

    pages = list(BankAccountService(client).paginator({"limit": 2, "filter": "x"}))

    assert [len(page) for page in pages] == [2, 2, 1]
    offsets = [dict(parse_qsl(r.uri.query))["offset"] for r in transport.requests]
    assert offsets == ["0", "2", "4"]
    assert all(dict(parse_qsl(r.uri.query))["filter"] == "x" for r in transport.requests)


def test_paginator_items_flattens_pages(client: Client, transport: MockTransport) -> None:
    transport.handler = _paged_handler(3)
    ids = [item.id for item in Paginator(client, "bank-accounts", {"limit": 2}).items()]
    assert ids == ["0", "1", "2"]


def test_paginator_without_total_stops_on_short_page(client: Client, transport: MockTransport) -> None:
    transport.handler = lambda request: json_response(200, [{"id": "only"}])
    pages = list(Paginator(client, "websites", {"limit": 10}))
    assert len(pages) == 1


def test_paginator_rejects_non_positive_limit(client: Client) -> None:
    with pytest.raises(ValueError):
        Paginator(client, "websites", {"limit": 0})

from __future__ import annotations

import pytest

from rebilly import (
    Client,
    Configuration,
    MockTransport,
    Website,
    api,
    create_client,
    get_default_client,
    reset_default_client,
    set_default_client,
)

from conftest import json_response


def test_default_client_lifecycle(client: Client) -> None:
    with pytest.raises(RuntimeError, match="not initialized"):
        get_default_client()

    set_default_client(client)
    assert get_default_client() is client

    reset_default_client()
    with pytest.raises(RuntimeError):
        get_default_client()


def test_constructing_a_client_does_not_register_it(client: Client) -> None:
    Client(Configuration(api_key="other", transport=MockTransport()))
    with pytest.raises(RuntimeError):
        api.get("websites")


def test_shortcuts_delegate_to_default_client(client: Client, transport: MockTransport) -> None:
    transport.add("GET", "v2.1/websites/w1", json_response(200, {"id": "w1"}))
    transport.add("POST", "v2.1/websites", json_response(201, {"id": "w2"}))
    transport.add("DELETE", "v2.1/websites/w1", json_response(204))
    set_default_client(client)

    assert isinstance(api.get("websites/{id}", {"id": "w1"}), Website)
    assert api.post({"name": "n"}, "websites").id == "w2"
    assert api.delete("websites/w1") is None
    assert [r.method for r in transport.requests] == ["GET", "POST", "DELETE"]


def test_create_client_from_parameters() -> None:
    transport = MockTransport()
    client = create_client(
        env_file=None,
        base={},
        api_key="k",
        base_url="https://a.test",
        transport=transport,
        set_default=True,
    )
    assert client.transport is transport
    assert client.config.base_url == "https://a.test"
    assert get_default_client() is client


def test_create_client_rejects_config_and_parameters() -> None:
    with pytest.raises(ValueError):
        create_client(config=Configuration(api_key="k"), api_key="other")


def test_create_client_with_prebuilt_config() -> None:
    transport = MockTransport()
    client = create_client(config=Configuration(api_key="k"), transport=transport)
    assert client.transport is transport

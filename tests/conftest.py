from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Generator, Mapping, Optional

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from requests.structures import CaseInsensitiveDict

from rebilly import Client, Configuration, MockTransport, Response, reset_default_client


def json_response(
    status_code: int,
    body: Any = None,
    *,
    headers: Optional[Mapping[str, str]] = None,
    reason: str = "",
) -> Response:
    content = b"" if body is None else json.dumps(body).encode("utf-8")
    return Response(
        status_code=status_code,
        headers=CaseInsensitiveDict(dict(headers or {})),
        body=content,
        reason=reason,
    )


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def client(transport: MockTransport) -> Client:
    return Client(Configuration(api_key="secret-key", base_url="https://api.test", transport=transport))


@pytest.fixture(autouse=True)
def _reset_default_client() -> Generator[None, None, None]:
    yield
    reset_default_client()

from __future__ import annotations

import json
from pathlib import Path
import sys
from typing import Any

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from invoice_swift.api_client import ApiClient  # noqa: E402
from invoice_swift.session import InMemorySession  # noqa: E402


class FakeBackend:
    """Answers requests from a route table and records what was sent."""

    def __init__(self, token: str | None = "test-token") -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.offline = False
        self.session = InMemorySession(token=token)
        self.client = ApiClient(
            self.session,
            base_url="https://api.test",
            timeout=5,
            transport=httpx.MockTransport(self._handle),
        )

    def on(self, method: str, path: str, status_code: int = 200, json: Any = None) -> None:
        self.routes[(method, path)] = (status_code, json)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)
        status_code, body = self.routes.get(
            (request.method, request.url.path), (404, {"message": "Not found"})
        )
        return httpx.Response(status_code, json=body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture()
def backend() -> FakeBackend:
    fake = FakeBackend()
    yield fake
    fake.client.close()


@pytest.fixture()
def anonymous_backend() -> FakeBackend:
    fake = FakeBackend(token=None)
    yield fake
    fake.client.close()

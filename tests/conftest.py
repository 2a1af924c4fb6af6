"""Shared fixtures: test settings and an in-memory backend."""

import json
from typing import Any, Callable, Dict, List, Tuple, Union

import httpx
import pytest

from magnetcraft_admin.config.settings import Settings
from magnetcraft_admin.utils.api_client import MagnetCraftAPIClient

API_URL = "http://backend.test/api"
API_PREFIX = "/api"

Route = Union[Dict[str, Any], Callable[[httpx.Request], httpx.Response]]

ADMIN_USER = {
    "id": 1,
    "email": "admin@magnetcraft.co.ke",
    "name": "Store Admin",
    "role": "ADMIN",
}

CUSTOMER_USER = {
    "id": 2,
    "email": "jane@example.com",
    "name": "Jane",
    "role": "CUSTOMER",
}


def report_body(report_id: int, name: str = "Monthly") -> Dict[str, Any]:
    return {
        "id": report_id,
        "report_name": name,
        "start_date": "2024-12-01T00:00:00.000Z",
        "end_date": "2024-12-31T00:00:00.000Z",
        "total_orders": 12,
        "total_revenue": 14400.0,
        "generated_at": "2025-01-01T08:00:00",
    }


class FakeBackend:
    """Routes requests to canned responses and records every request."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.requests: List[httpx.Request] = []

    def on(self, method: str, path: str, handler: Route = None, **response: Any) -> None:
        """Answer ``method path`` with ``handler(request)`` or ``httpx.Response(**response)``."""
        self.routes[(method, API_PREFIX + path)] = handler or response

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        if callable(route):
            return route(request)
        return httpx.Response(**route)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [request for request in self.requests
                if request.method == method and request.url.path == API_PREFIX + path]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client(self, config: Settings) -> MagnetCraftAPIClient:
        return MagnetCraftAPIClient(config, transport=self.transport())

    def sign_in_as(self, user: Dict[str, Any]) -> None:
        self.on("POST", "/auth/login", status_code=200, json={"user": user},
                headers={"set-cookie": "connect.sid=session-1; Path=/"})
        self.on("GET", "/auth/me", status_code=200, json=user)
        self.on("POST", "/auth/logout", status_code=200, json={"message": "Logged out"})


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


@pytest.fixture
def config(tmp_path):
    """Settings pointing at the fake backend, without retry delays."""
    return Settings(
        magnetcraft_api_url=API_URL,
        download_dir=str(tmp_path / "downloads"),
        max_retries=0,
        retry_backoff=0,
        magnetcraft_email=None,
        magnetcraft_password=None,
    )


@pytest.fixture
def backend():
    return FakeBackend()

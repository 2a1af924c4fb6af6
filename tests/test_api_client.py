"""Tests for the HTTP API client."""

import httpx
import pytest

from conftest import ADMIN_USER, request_json
from magnetcraft_admin.utils.api_client import (
    MagnetCraftAPIClient,
    body_message,
    path_segment,
    response_message,
)


class TestRequests:
    """Test request plumbing."""

    @pytest.mark.asyncio
    async def test_requires_context_manager(self, config, backend):
        client = backend.client(config)

        with pytest.raises(RuntimeError):
            await client.get_users()

    @pytest.mark.asyncio
    async def test_list_reports_sends_page_params(self, config, backend):
        backend.on("GET", "/admin/reports", status_code=200, json={"reports": []})

        async with backend.client(config) as client:
            response = await client.list_reports(3, 10)

        assert response.status_code == 200
        request = backend.calls("GET", "/admin/reports")[0]
        assert request.url.params["page"] == "3"
        assert request.url.params["per_page"] == "10"

    @pytest.mark.asyncio
    async def test_endpoint_paths_are_filled_in(self, config, backend):
        backend.on("POST", "/admin/reports/42/email", status_code=200, json={})
        backend.on("GET", "/admin/reports/42/charts/revenue", status_code=200, content=b"png")

        async with backend.client(config) as client:
            await client.email_report(42, {"recipient_email": "a@b.co"})
            await client.fetch_report_chart(42, "revenue")

        assert request_json(backend.calls("POST", "/admin/reports/42/email")[0]) == {
            "recipient_email": "a@b.co"
        }
        assert len(backend.calls("GET", "/admin/reports/42/charts/revenue")) == 1

    @pytest.mark.asyncio
    async def test_reset_token_is_quoted(self, config, backend):
        async with backend.client(config) as client:
            await client.validate_reset_token("a/b c")

        assert backend.requests[0].url.raw_path.endswith(b"/auth/reset-password/a%2Fb%20c")

    @pytest.mark.asyncio
    async def test_session_cookie_is_kept_across_contexts(self, config, backend):
        backend.sign_in_as(ADMIN_USER)
        client = backend.client(config)

        async with client:
            await client.login("admin@magnetcraft.co.ke", "secret123")

        async with client:
            await client.get_current_user()

        assert "connect.sid=session-1" in backend.calls("GET", "/auth/me")[0].headers["cookie"]

    @pytest.mark.asyncio
    async def test_clear_session_drops_cookie(self, config, backend):
        backend.sign_in_as(ADMIN_USER)

        async with backend.client(config) as client:
            await client.login("admin@magnetcraft.co.ke", "secret123")
            client.clear_session()
            await client.get_current_user()

        assert "cookie" not in backend.calls("GET", "/auth/me")[0].headers


class TestRetries:
    """Test retry on connection failures."""

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self, config, backend):
        attempts = []

        def flaky(request):
            attempts.append(request)
            if len(attempts) < 3:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=[])

        backend.on("GET", "/admin/users", flaky)
        config = config.model_copy(update={"max_retries": 2})

        async with MagnetCraftAPIClient(config, transport=backend.transport()) as client:
            response = await client.get_users()

        assert response.status_code == 200
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, config, backend):
        def down(request):
            raise httpx.ConnectError("connection refused", request=request)

        backend.on("GET", "/admin/users", down)
        config = config.model_copy(update={"max_retries": 1})

        async with MagnetCraftAPIClient(config, transport=backend.transport()) as client:
            with pytest.raises(httpx.ConnectError):
                await client.get_users()

        assert len(backend.requests) == 2

    @pytest.mark.asyncio
    async def test_error_status_is_not_retried(self, config, backend):
        backend.on("GET", "/admin/users", status_code=500, json={"message": "boom"})
        config = config.model_copy(update={"max_retries": 3})

        async with MagnetCraftAPIClient(config, transport=backend.transport()) as client:
            response = await client.get_users()

        assert response.status_code == 500
        assert len(backend.requests) == 1


class TestMessages:
    """Test backend message extraction."""

    def test_message_then_msg(self):
        assert body_message({"message": "Report not found"}, "default") == "Report not found"
        assert body_message({"msg": "Unauthorized"}, "default") == "Unauthorized"
        assert body_message({"message": ""}, "default") == "default"
        assert body_message(["not", "a", "dict"], "default") == "default"

    def test_non_json_body_uses_default(self):
        response = httpx.Response(502, content=b"<html>Bad Gateway</html>")
        assert response_message(response, "Failed to fetch reports") == "Failed to fetch reports"


class TestPathSegments:
    """Test escaping of values placed in endpoint paths."""

    def test_plain_values_are_unchanged(self):
        assert path_segment(42) == "42"
        assert path_segment("revenue") == "revenue"

    def test_separators_are_encoded(self):
        assert path_segment("../../users") == "..%2F..%2Fusers"
        assert path_segment("a b?c#d") == "a%20b%3Fc%23d"

    def test_dot_segments_are_escaped(self):
        assert path_segment(".") == "%2E"
        assert path_segment("..") == "%2E%2E"

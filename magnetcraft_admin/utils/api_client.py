"""HTTP API client utilities."""

import asyncio
import urllib.parse
from typing import Any, Dict, Optional

import httpx
import structlog
from httpx import AsyncClient, Response

from ..config.settings import Settings

logger = structlog.get_logger(__name__)

USER_AGENT = "MagnetCraft-Admin/0.1.0"


class MagnetCraftAPIClient:
    """Async HTTP client for the MagnetCraft backend API.

    Endpoint methods return the raw response; interpreting status codes is
    left to the caller so backend error messages can be surfaced. Requests
    that fail to connect are retried with exponential backoff.
    """

    def __init__(
        self,
        config: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        cookies: Optional[Dict[str, str]] = None
    ):
        self.config = config
        self.base_url = config.magnetcraft_api_url.rstrip('/')
        self.timeout = config.api_timeout / 1000  # Convert ms to seconds
        self.max_retries = config.max_retries
        self.retry_backoff = config.retry_backoff
        self.cookies = httpx.Cookies(cookies)
        self._transport = transport
        self._client: Optional[AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry."""
        self._client = AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            cookies=self.cookies,
            transport=self._transport,
            headers={
                "User-Agent": USER_AGENT,
                "Accept": "application/json"
            }
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self._client:
            # Keep the session cookie for the next context
            self.cookies.update(self._client.cookies)
            await self._client.aclose()
            self._client = None

    def clear_session(self) -> None:
        """Forget the session cookie."""
        self.cookies.clear()
        if self._client:
            self._client.cookies.clear()

    async def _make_request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        retry_count: int = 0
    ) -> Response:
        """Make HTTP request with retry logic."""
        if not self._client:
            raise RuntimeError(
                "Client not initialized. Use async context manager.")

        method = method.upper()
        if method not in ("GET", "POST", "PUT", "DELETE"):
            raise ValueError(f"Unsupported HTTP method: {method}")

        logger.info(
            "Making API request",
            method=method,
            path=path,
            retry_count=retry_count
        )

        try:
            response = await self._client.request(
                method, path, json=data, params=params)

            logger.info(
                "API response received",
                method=method,
                path=path,
                status_code=response.status_code,
                response_size=len(response.content)
            )

            return response

        except httpx.TimeoutException as e:
            logger.error("Request timed out", method=method,
                         path=path, error=str(e))
            if retry_count < self.max_retries:
                await asyncio.sleep(self.retry_backoff * 2 ** retry_count)
                return await self._make_request(method, path, data, params, retry_count + 1)
            raise

        except httpx.RequestError as e:
            logger.error("Request failed", method=method,
                         path=path, error=str(e))
            if retry_count < self.max_retries:
                await asyncio.sleep(self.retry_backoff * 2 ** retry_count)
                return await self._make_request(method, path, data, params, retry_count + 1)
            raise

    # Reports

    async def create_report(self, payload: Dict[str, Any]) -> Response:
        """Ask the backend to generate a report."""
        return await self._make_request("POST", self.config.admin_reports_endpoint, payload)

    async def list_reports(self, page: int, per_page: int) -> Response:
        """Fetch one page of reports."""
        return await self._make_request(
            "GET",
            self.config.admin_reports_endpoint,
            params={"page": page, "per_page": per_page}
        )

    async def fetch_report_pdf(self, report_id: Any) -> Response:
        """Fetch the rendered PDF of a report."""
        path = self.config.admin_report_download_endpoint.format(
            report_id=path_segment(report_id))
        return await self._make_request("GET", path)

    async def fetch_report_chart(self, report_id: Any, chart_type: str) -> Response:
        """Fetch a rendered chart image of a report."""
        path = self.config.admin_report_chart_endpoint.format(
            report_id=path_segment(report_id), chart_type=path_segment(chart_type))
        return await self._make_request("GET", path)

    async def email_report(self, report_id: Any, payload: Dict[str, Any]) -> Response:
        """Ask the backend to email a report."""
        path = self.config.admin_report_email_endpoint.format(
            report_id=path_segment(report_id))
        return await self._make_request("POST", path, payload)

    # Admin data

    async def get_users(self) -> Response:
        return await self._make_request("GET", self.config.admin_users_endpoint)

    async def get_orders(self, page: int = 1) -> Response:
        return await self._make_request(
            "GET", self.config.admin_orders_endpoint, params={"page": page})

    # Auth

    async def login(self, email: str, password: str) -> Response:
        """Open a session; the backend answers with a session cookie."""
        return await self._make_request(
            "POST",
            self.config.auth_login_endpoint,
            {"email": email, "password": password}
        )

    async def register(self, payload: Dict[str, Any]) -> Response:
        return await self._make_request("POST", self.config.auth_register_endpoint, payload)

    async def get_current_user(self) -> Response:
        return await self._make_request("GET", self.config.auth_me_endpoint)

    async def forgot_password(self, email: str) -> Response:
        return await self._make_request(
            "POST", self.config.auth_forgot_password_endpoint, {"email": email})

    async def validate_reset_token(self, token: str) -> Response:
        path = self.config.auth_reset_password_endpoint.format(token=path_segment(token))
        return await self._make_request("GET", path)

    async def reset_password(self, token: str, password: str) -> Response:
        path = self.config.auth_reset_password_endpoint.format(token=path_segment(token))
        return await self._make_request("POST", path, {"password": password})

    async def logout(self) -> Response:
        """Close the session."""
        return await self._make_request("POST", self.config.auth_logout_endpoint, {})


def response_message(response: Response, default: str) -> str:
    """Backend-provided message of a response, or ``default``.

    Looks at ``message`` then ``msg``; non-JSON bodies give ``default``.
    """
    try:
        body = response.json()
    except ValueError:
        return default
    return body_message(body, default)


def body_message(body: Any, default: str) -> str:
    """Message carried by an already-parsed JSON body, or ``default``."""
    if isinstance(body, dict):
        for key in ("message", "msg"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return default


def path_segment(value: Any) -> str:
    """Percent-encode a value for use as a single URL path segment.

    Slashes are encoded and dot-only segments are escaped so the value can
    never climb out of its endpoint.
    """
    segment = urllib.parse.quote(str(value), safe="")
    if segment in (".", ".."):
        segment = segment.replace(".", "%2E")
    return segment

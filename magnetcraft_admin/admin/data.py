"""Loading users and orders for the admin dashboard."""

import asyncio

import structlog

from ..models.admin import AdminData, AdminUser, Order
from ..models.report import Pagination
from ..models.result import OperationResult
from ..utils.api_client import MagnetCraftAPIClient, response_message

logger = structlog.get_logger(__name__)


class AdminDataLoader:
    """Fetches the collections the admin dashboard projects over."""

    def __init__(self, client: MagnetCraftAPIClient):
        self.client = client

    async def fetch_admin_data(self, page: int = 1) -> OperationResult:
        """Fetch all users and one page of orders concurrently.

        ``data`` of a successful result is an ``AdminData``.
        """
        logger.info("Fetching admin data", orders_page=page)

        try:
            users_response, orders_response = await asyncio.gather(
                self.client.get_users(),
                self.client.get_orders(page)
            )

            if not users_response.is_success:
                return OperationResult.failed(
                    response_message(users_response, "Failed to fetch users"),
                    error=f"HTTP {users_response.status_code}"
                )
            if not orders_response.is_success:
                return OperationResult.failed(
                    response_message(orders_response, "Failed to fetch orders"),
                    error=f"HTTP {orders_response.status_code}"
                )

            users_body = users_response.json()
            users = [AdminUser(**item) for item in users_body] if isinstance(
                users_body, list) else []

            orders_body = orders_response.json()
            if not isinstance(orders_body, dict):
                raise ValueError(
                    f"Unexpected order listing body: {type(orders_body).__name__}")
            orders = [Order.from_response(item)
                      for item in orders_body.get("orders") or []]

            data = AdminData(
                users=users,
                orders=orders,
                orders_pagination=Pagination.from_response(orders_body)
            )
            logger.info("Admin data fetched", users=len(users), orders=len(orders))
            return OperationResult.ok("Admin data fetched successfully", data=data)

        except Exception as e:
            logger.error("Failed to fetch admin data", error=str(e))
            return OperationResult.network_error(e)

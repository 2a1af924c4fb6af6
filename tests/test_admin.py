"""Tests for the admin data loader and dashboard shell."""

from unittest.mock import AsyncMock

import pytest

from conftest import ADMIN_USER, CUSTOMER_USER
from magnetcraft_admin.admin.data import AdminDataLoader
from magnetcraft_admin.admin.shell import AdminAccessError, AdminShell, AdminTab
from magnetcraft_admin.models.admin import AdminUser, Order
from magnetcraft_admin.models.auth import User

USERS = [
    {"id": 2, "name": "Jane", "email": "jane@example.com", "orders": 2, "totalSpent": 2400},
    {"id": 3, "name": "Otieno", "email": "otieno@example.com", "orders": 1, "totalSpent": 1200},
]

ORDERS = [
    {"id": 10, "customer": "Jane", "date": "2025-01-02", "items": "4x Photo magnet",
     "total": 1200, "status": "pending", "paymentMethod": "M-Pesa"},
    {"id": 11, "customer_name": "Jane", "items": "2x Custom magnet",
     "total": 1200, "status": "Delivered"},
    {"id": 12, "customer": "Otieno", "items": "1x Fridge set",
     "total": 1200, "status": "shipped"},
]


def make_shell(reports=None):
    return AdminShell(
        [AdminUser(**user) for user in USERS],
        [Order.from_response(order) for order in ORDERS],
        reports
    )


class TestAdminDataLoader:
    """Test concurrent loading of users and orders."""

    @pytest.mark.asyncio
    async def test_fetch_admin_data(self, config, backend):
        backend.on("GET", "/admin/users", status_code=200, json=USERS)
        backend.on("GET", "/admin/orders", status_code=200, json={
            "orders": ORDERS,
            "pagination": {"total": 3, "pages": 1, "current_page": 1},
        })

        async with backend.client(config) as client:
            result = await AdminDataLoader(client).fetch_admin_data()

        assert result.success is True
        data = result.data
        assert [user.name for user in data.users] == ["Jane", "Otieno"]
        assert data.users[0].total_spent == 2400
        assert data.orders[1].customer == "Jane"
        assert data.orders_pagination.total == 3

    @pytest.mark.asyncio
    async def test_users_failure(self, config, backend):
        backend.on("GET", "/admin/users", status_code=403, json={"message": "Admin only"})
        backend.on("GET", "/admin/orders", status_code=200, json={"orders": []})

        async with backend.client(config) as client:
            result = await AdminDataLoader(client).fetch_admin_data()

        assert result.success is False
        assert result.message == "Admin only"


class TestAdminShell:
    """Test the dashboard projection."""

    def test_non_admin_is_refused(self):
        with pytest.raises(AdminAccessError):
            AdminShell.for_user(User(**CUSTOMER_USER), [], [])

        with pytest.raises(AdminAccessError):
            AdminShell.for_user(None, [], [])

    def test_admin_is_allowed(self):
        shell = AdminShell.for_user(User(**ADMIN_USER), [], [])

        assert shell.active_tab is AdminTab.OVERVIEW

    def test_overview(self):
        overview = make_shell().overview()

        assert overview.total_revenue == 3600
        assert overview.total_orders == 3
        assert overview.pending_orders == 1
        assert overview.completed_orders == 1
        assert overview.total_users == 2

    def test_empty_overview(self):
        overview = AdminShell([], []).overview()

        assert overview.total_revenue == 0
        assert overview.pending_orders == 0

    def test_rows(self):
        shell = make_shell()

        assert shell.user_rows()[0] == ("Jane", "jane@example.com", 2, 2400)
        assert shell.order_rows()[0] == (
            "10", "Jane", "2025-01-02", "4x Photo magnet", 1200, "pending", "M-Pesa")
        assert shell.order_rows()[2][2] == ""

    def test_source_collections_are_not_modified(self):
        users = [AdminUser(**USERS[0])]
        shell = AdminShell(users, [])
        users.clear()

        assert len(shell.users) == 1

    @pytest.mark.asyncio
    async def test_reports_tab_loads_once(self):
        reports = AsyncMock()
        shell = make_shell(reports)

        await shell.activate("reports")
        await shell.activate(AdminTab.USERS)
        await shell.activate(AdminTab.REPORTS)

        assert shell.active_tab is AdminTab.REPORTS
        reports.load_reports.assert_awaited_once()

    def test_unknown_tab(self):
        with pytest.raises(ValueError):
            make_shell().select_tab("settings")

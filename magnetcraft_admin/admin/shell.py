"""Tabbed admin dashboard over users, orders and reports."""

from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

import structlog

from ..models.admin import AdminOverview, AdminUser, Order
from ..models.auth import User
from ..reports.controller import ReportViewController

logger = structlog.get_logger(__name__)


class AdminTab(str, Enum):
    """Dashboard tabs."""

    OVERVIEW = "overview"
    USERS = "users"
    ORDERS = "orders"
    REPORTS = "reports"


class AdminAccessError(PermissionError):
    """Raised when a non-admin user opens the admin dashboard."""


class AdminShell:
    """Read-only projection of users and orders plus the report manager.

    The supplied collections are copied into tuples and never modified.
    """

    def __init__(
        self,
        users: Sequence[AdminUser],
        orders: Sequence[Order],
        reports: Optional[ReportViewController] = None
    ):
        self._users: Tuple[AdminUser, ...] = tuple(users)
        self._orders: Tuple[Order, ...] = tuple(orders)
        self.reports = reports
        self.active_tab = AdminTab.OVERVIEW
        self._reports_loaded = False

    @classmethod
    def for_user(
        cls,
        user: Optional[User],
        users: Sequence[AdminUser],
        orders: Sequence[Order],
        reports: Optional[ReportViewController] = None
    ) -> "AdminShell":
        """Build the dashboard for ``user``, who must be an admin."""
        if user is None or not user.is_admin:
            logger.warning("Admin dashboard denied",
                           user_id=user.id if user else None)
            raise AdminAccessError("Admin access required")
        return cls(users, orders, reports)

    @property
    def users(self) -> Tuple[AdminUser, ...]:
        return self._users

    @property
    def orders(self) -> Tuple[Order, ...]:
        return self._orders

    def select_tab(self, tab: Union[AdminTab, str]) -> AdminTab:
        self.active_tab = AdminTab(tab)
        return self.active_tab

    async def activate(self, tab: Union[AdminTab, str]) -> AdminTab:
        """Select a tab; the reports tab loads its first page on first open."""
        selected = self.select_tab(tab)
        if selected is AdminTab.REPORTS and self.reports and not self._reports_loaded:
            await self.reports.load_reports()
            self._reports_loaded = True
        return selected

    # Aggregates

    def total_revenue(self) -> float:
        return sum(order.total for order in self._orders)

    def pending_order_count(self) -> int:
        return sum(1 for order in self._orders if order.is_pending)

    def completed_order_count(self) -> int:
        return sum(1 for order in self._orders if order.is_completed)

    def overview(self) -> AdminOverview:
        return AdminOverview(
            total_revenue=self.total_revenue(),
            total_orders=len(self._orders),
            pending_orders=self.pending_order_count(),
            completed_orders=self.completed_order_count(),
            total_users=len(self._users)
        )

    # Tables

    def user_rows(self) -> List[Tuple[str, str, int, float]]:
        """(name, email, orders, total spent) per user."""
        return [(user.name, user.email, user.orders, user.total_spent)
                for user in self._users]

    def order_rows(self) -> List[Tuple[str, str, str, str, float, str, str]]:
        """(id, customer, date, items, total, status, payment method) per order."""
        return [
            (
                order.id,
                order.customer or "",
                order.date or "",
                order.items,
                order.total,
                order.status,
                order.payment_method or ""
            )
            for order in self._orders
        ]

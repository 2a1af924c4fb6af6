"""Admin dashboard tools for the MagnetCraft MCP server."""

from typing import Optional, Tuple

import structlog
from mcp.types import TextContent, Tool

from ..admin.data import AdminDataLoader
from ..admin.shell import AdminAccessError, AdminShell, AdminTab
from ..auth.session import MagnetCraftAuth
from ..models.admin import AdminData
from .common import format_amount, require_admin, text

logger = structlog.get_logger(__name__)

_ORDERS_PAGE_SCHEMA = {
    "type": "integer",
    "description": "Page of orders to load (optional, defaults to 1)",
    "minimum": 1
}


def admin_overview_tool() -> Tool:
    """Create the admin_overview tool."""
    return Tool(
        name="admin_overview",
        description="Show store totals: revenue, orders by status and registered users",
        inputSchema={
            "type": "object",
            "properties": {"page": _ORDERS_PAGE_SCHEMA},
            "required": []
        }
    )


def list_users_tool() -> Tool:
    """Create the list_users tool."""
    return Tool(
        name="list_users",
        description="List registered users with their order count and spend",
        inputSchema={"type": "object", "properties": {}, "required": []}
    )


def list_orders_tool() -> Tool:
    """Create the list_orders tool."""
    return Tool(
        name="list_orders",
        description="List one page of orders",
        inputSchema={
            "type": "object",
            "properties": {"page": _ORDERS_PAGE_SCHEMA},
            "required": []
        }
    )


async def _open_shell(
    auth: MagnetCraftAuth,
    loader: AdminDataLoader,
    tab: AdminTab,
    page: int = 1
) -> Tuple[Optional[AdminShell], Optional[AdminData], Optional[TextContent]]:
    """Load admin data and build the dashboard, or return error content."""
    denied = await require_admin(auth)
    if denied:
        return None, None, denied

    result = await loader.fetch_admin_data(page)
    if not result.success:
        return None, None, text(f"❌ {result.message}")

    data: AdminData = result.data
    try:
        shell = AdminShell.for_user(auth.current_user, data.users, data.orders)
    except AdminAccessError as e:
        return None, None, text(f"❌ {e}")

    await shell.activate(tab)
    return shell, data, None


async def admin_overview(
    auth: MagnetCraftAuth,
    loader: AdminDataLoader,
    page: int = 1
) -> TextContent:
    """
    Show the dashboard overview.

    Args:
        auth: Authentication manager
        loader: Admin data loader
        page: Page of orders the totals are computed over

    Returns:
        TextContent with the store totals
    """
    logger.info("MCP tool called: admin_overview", page=page)

    shell, _, error = await _open_shell(auth, loader, AdminTab.OVERVIEW, page)
    if error:
        return error

    overview = shell.overview()
    return text(f"""📊 **Store Overview**

💰 **Total Revenue:** {format_amount(overview.total_revenue)}
📦 **Total Orders:** {overview.total_orders:,}
⏳ **Pending Orders:** {overview.pending_orders:,}
✅ **Completed Orders:** {overview.completed_orders:,}
👥 **Total Users:** {overview.total_users:,}""")


async def list_users(auth: MagnetCraftAuth, loader: AdminDataLoader) -> TextContent:
    """Show the user table."""
    logger.info("MCP tool called: list_users")

    shell, _, error = await _open_shell(auth, loader, AdminTab.USERS)
    if error:
        return error

    rows = shell.user_rows()
    if not rows:
        return text("👥 No users found.")

    lines = [f"👥 **Users** ({len(rows)})", ""]
    for name, email, orders, total_spent in rows:
        lines.append(
            f"• **{name}** ({email}) | Orders: {orders:,} | "
            f"Spent: {format_amount(total_spent)}")
    return text("\n".join(lines))


async def list_orders(
    auth: MagnetCraftAuth,
    loader: AdminDataLoader,
    page: int = 1
) -> TextContent:
    """Show one page of the order table."""
    logger.info("MCP tool called: list_orders", page=page)

    shell, data, error = await _open_shell(auth, loader, AdminTab.ORDERS, page)
    if error:
        return error

    rows = shell.order_rows()
    if not rows:
        return text("📦 No orders found.")

    lines = ["📦 **Orders**", ""]
    for order_id, customer, date, items, total, status, payment_method in rows:
        line = f"• `{order_id}` | {customer or 'Unknown'}"
        if date:
            line += f" | {date}"
        line += f" | {items} | {format_amount(total)} | {status}"
        if payment_method:
            line += f" | {payment_method}"
        lines.append(line)

    pagination = data.orders_pagination
    if pagination is not None:
        lines.append("")
        lines.append(
            f"**Page {pagination.current_page} of {max(pagination.pages, 1)}** "
            f"({pagination.total} orders)")

    return text("\n".join(lines))

"""Helpers shared by the MCP tools."""

from typing import Optional

from mcp.types import TextContent

from ..auth.session import MagnetCraftAuth


def text(message: str) -> TextContent:
    return TextContent(type="text", text=message)


def format_amount(amount: float) -> str:
    return f"KSh {amount:,.0f}"


async def require_admin(auth: MagnetCraftAuth) -> Optional[TextContent]:
    """Error content when no admin is signed in, else None."""
    if not await auth.ensure_authenticated():
        return text("❌ Authentication required. Please use the `magnetcraft_login` tool first.")

    if not auth.auth_state.is_admin():
        return text("❌ Admin access required.")

    return None

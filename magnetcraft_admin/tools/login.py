"""Login and logout tools for the MagnetCraft MCP server."""

import structlog
from mcp.types import TextContent, Tool

from ..auth.session import MagnetCraftAuth
from .common import text

logger = structlog.get_logger(__name__)


def magnetcraft_login_tool() -> Tool:
    """Create the magnetcraft_login tool."""
    return Tool(
        name="magnetcraft_login",
        description="Sign in to the MagnetCraft admin backend",
        inputSchema={
            "type": "object",
            "properties": {
                "email": {
                    "type": "string",
                    "description": "Account email address"
                },
                "password": {
                    "type": "string",
                    "description": "Account password"
                }
            },
            "required": ["email", "password"]
        }
    )


def magnetcraft_logout_tool() -> Tool:
    """Create the magnetcraft_logout tool."""
    return Tool(
        name="magnetcraft_logout",
        description="Sign out of the MagnetCraft admin backend",
        inputSchema={"type": "object", "properties": {}, "required": []}
    )


async def magnetcraft_login(
    auth: MagnetCraftAuth,
    email: str,
    password: str
) -> TextContent:
    """
    Authenticate with MagnetCraft using email and password.

    Args:
        auth: Authentication manager
        email: User's email address
        password: User's password

    Returns:
        TextContent with authentication result
    """
    logger.info("MCP tool called: magnetcraft_login", email=email)

    result = await auth.login(email, password)
    if not result.success:
        return text(f"❌ Authentication failed: {result.message}")

    user = result.data
    success_message = f"""✅ {result.message}

**User:** {user.name} ({user.email})
**Role:** {user.role.value}"""

    if not user.is_admin:
        success_message += "\n\n⚠️ This account cannot use the admin tools."

    return text(success_message)


async def magnetcraft_logout(auth: MagnetCraftAuth) -> TextContent:
    """Sign out and clear the session."""
    logger.info("MCP tool called: magnetcraft_logout")

    await auth.logout()
    return text("✅ Signed out.")

"""MCP server exposing the MagnetCraft admin operations."""

import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

import httpx
import mcp.server.stdio
import structlog
from mcp.server import Server
from mcp.types import TextContent, Tool

from .admin.data import AdminDataLoader
from .auth.session import MagnetCraftAuth
from .config.settings import Settings, settings
from .models.auth import AuthState
from .reports.controller import ReportViewController
from .reports.files import ArtifactSaver
from .reports.transport import ReportTransport
from .tools.admin import (
    admin_overview,
    admin_overview_tool,
    list_orders,
    list_orders_tool,
    list_users,
    list_users_tool,
)
from .tools.login import (
    magnetcraft_login,
    magnetcraft_login_tool,
    magnetcraft_logout,
    magnetcraft_logout_tool,
)
from .tools.reports import (
    download_chart,
    download_chart_tool,
    download_report,
    download_report_tool,
    email_report,
    email_report_tool,
    generate_report,
    generate_report_tool,
    list_reports,
    list_reports_tool,
)
from .utils.api_client import MagnetCraftAPIClient
from .utils.validation import ValidationError, validate_required_fields

logger = structlog.get_logger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging on stderr; stdout carries the protocol."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class MagnetCraftMCPServer:
    """MCP Server for the MagnetCraft admin backend.

    Holds one API client whose cookie jar carries the backend session, and
    the auth, report and admin components built on it. The client must be
    open (``async with server.client``) while tools are called.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.config = config or settings
        self.client = MagnetCraftAPIClient(self.config, transport=transport)
        self.auth_state = AuthState()
        self.auth = MagnetCraftAuth(self.client, self.auth_state)
        self.reports = ReportViewController(
            ReportTransport(self.client, ArtifactSaver(self.config.download_dir)),
            per_page=self.config.reports_per_page
        )
        self.admin_data = AdminDataLoader(self.client)
        self.tools: List[Tool] = [
            magnetcraft_login_tool(),
            magnetcraft_logout_tool(),
            list_reports_tool(),
            generate_report_tool(),
            download_report_tool(),
            download_chart_tool(),
            email_report_tool(),
            admin_overview_tool(),
            list_users_tool(),
            list_orders_tool()
        ]

    async def handle_list_tools(self) -> List[Tool]:
        """Handle list tools request."""
        logger.info("Listing tools", tool_count=len(self.tools))
        return self.tools

    async def handle_call_tool(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]]
    ) -> List[TextContent]:
        """Handle tool call request."""
        arguments = arguments or {}
        logger.info(
            "Tool call requested",
            tool_name=name,
            arguments={key: value for key, value in arguments.items()
                       if key != "password"}
        )

        try:
            tool = next((tool for tool in self.tools if tool.name == name), None)
            if tool is not None:
                validate_required_fields(arguments, tool.inputSchema.get("required", []))

            if name == "magnetcraft_login":
                result = await magnetcraft_login(
                    self.auth,
                    arguments.get("email", ""),
                    arguments.get("password", "")
                )
            elif name == "magnetcraft_logout":
                result = await magnetcraft_logout(self.auth)
            elif name == "list_reports":
                result = await list_reports(
                    self.auth,
                    self.reports,
                    page=arguments.get("page")
                )
            elif name == "generate_report":
                result = await generate_report(
                    self.auth,
                    self.reports,
                    arguments.get("report_name", ""),
                    start_date=arguments.get("start_date"),
                    end_date=arguments.get("end_date")
                )
            elif name == "download_report":
                result = await download_report(
                    self.auth,
                    self.reports,
                    arguments.get("report_id", ""),
                    report_name=arguments.get("report_name", "report")
                )
            elif name == "download_chart":
                result = await download_chart(
                    self.auth,
                    self.reports,
                    arguments.get("report_id", ""),
                    arguments.get("chart_type", ""),
                    report_name=arguments.get("report_name", "chart")
                )
            elif name == "email_report":
                result = await email_report(
                    self.auth,
                    self.reports,
                    arguments.get("report_id", ""),
                    arguments.get("recipient_email", ""),
                    sender_email=arguments.get("sender_email"),
                    report_name=arguments.get("report_name", "")
                )
            elif name == "admin_overview":
                result = await admin_overview(
                    self.auth,
                    self.admin_data,
                    page=arguments.get("page", 1)
                )
            elif name == "list_users":
                result = await list_users(self.auth, self.admin_data)
            elif name == "list_orders":
                result = await list_orders(
                    self.auth,
                    self.admin_data,
                    page=arguments.get("page", 1)
                )
            else:
                logger.error("Unknown tool requested", tool_name=name)
                result = TextContent(
                    type="text",
                    text=f"❌ Unknown tool: {name}"
                )

            logger.info("Tool call completed", tool_name=name)
            return [result]

        except ValidationError as e:
            logger.warning("Tool call rejected", tool_name=name, reason=str(e))
            return [TextContent(type="text", text=f"❌ {e}")]
        except Exception as e:
            logger.error(
                "Tool call failed",
                tool_name=name,
                error=str(e),
                exc_info=True
            )
            return [TextContent(
                type="text",
                text=f"❌ Error executing {name}: {str(e)}"
            )]

    async def auto_login(self) -> bool:
        """Sign in with the configured credentials, if any."""
        email = self.config.magnetcraft_email
        password = self.config.magnetcraft_password
        if not email or not password:
            return False

        result = await self.auth.login(email, password)
        if not result.success:
            logger.warning("Automatic login failed", email=email, reason=result.message)
        return result.success


async def main():
    """Main server entry point."""
    configure_logging(settings.log_level)
    logger.info("Starting MagnetCraft MCP Server",
                api_url=settings.magnetcraft_api_url)

    server = MagnetCraftMCPServer()
    mcp_server = Server(settings.mcp_server_name)

    @mcp_server.list_tools()
    async def list_tools_handler() -> List[Tool]:
        return await server.handle_list_tools()

    @mcp_server.call_tool()
    async def call_tool_handler(name: str, arguments: dict) -> List[TextContent]:
        return await server.handle_call_tool(name, arguments)

    async with server.client:
        await server.auto_login()

        logger.info("MCP Server ready")
        async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
            await mcp_server.run(
                read_stream,
                write_stream,
                mcp_server.create_initialization_options(),
            )


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error("Server failed", error=str(e), exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()

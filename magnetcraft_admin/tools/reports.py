"""Report management tools for the MagnetCraft MCP server."""

from typing import Optional, Union

import structlog
from mcp.types import TextContent, Tool

from ..auth.session import MagnetCraftAuth
from ..models.report import Report
from ..reports.controller import ReportViewController, ReportViewState
from ..utils.validation import validate_report_id
from .common import format_amount, require_admin, text

logger = structlog.get_logger(__name__)

CHART_TYPES = ["revenue", "orders", "products", "categories"]

_REPORT_ID_SCHEMA = {
    "type": ["string", "integer"],
    "description": "ID of the report"
}
_REPORT_NAME_SCHEMA = {
    "type": "string",
    "description": "Report name, used in the saved file name"
}


def list_reports_tool() -> Tool:
    """Create the list_reports tool."""
    return Tool(
        name="list_reports",
        description="List generated sales reports, one page at a time",
        inputSchema={
            "type": "object",
            "properties": {
                "page": {
                    "type": "integer",
                    "description": "Page number to show (optional, defaults to the current page)",
                    "minimum": 1
                }
            },
            "required": []
        }
    )


def generate_report_tool() -> Tool:
    """Create the generate_report tool."""
    return Tool(
        name="generate_report",
        description="Generate a new sales report for an optional date range",
        inputSchema={
            "type": "object",
            "properties": {
                "report_name": {
                    "type": "string",
                    "description": "Name of the report (required)"
                },
                "start_date": {
                    "type": "string",
                    "description": "Start of the range, YYYY-MM-DD or ISO timestamp (optional)"
                },
                "end_date": {
                    "type": "string",
                    "description": "End of the range, YYYY-MM-DD or ISO timestamp (optional)"
                }
            },
            "required": ["report_name"]
        }
    )


def download_report_tool() -> Tool:
    """Create the download_report tool."""
    return Tool(
        name="download_report",
        description="Download a report as PDF into the downloads directory",
        inputSchema={
            "type": "object",
            "properties": {
                "report_id": _REPORT_ID_SCHEMA,
                "report_name": _REPORT_NAME_SCHEMA
            },
            "required": ["report_id"]
        }
    )


def download_chart_tool() -> Tool:
    """Create the download_chart tool."""
    return Tool(
        name="download_chart",
        description="Download a chart image of a report into the downloads directory",
        inputSchema={
            "type": "object",
            "properties": {
                "report_id": _REPORT_ID_SCHEMA,
                "chart_type": {
                    "type": "string",
                    "description": "Chart to download",
                    "enum": CHART_TYPES
                },
                "report_name": _REPORT_NAME_SCHEMA
            },
            "required": ["report_id", "chart_type"]
        }
    )


def email_report_tool() -> Tool:
    """Create the email_report tool."""
    return Tool(
        name="email_report",
        description="Email a report to a recipient",
        inputSchema={
            "type": "object",
            "properties": {
                "report_id": _REPORT_ID_SCHEMA,
                "recipient_email": {
                    "type": "string",
                    "description": "Address to send the report to (required)"
                },
                "sender_email": {
                    "type": "string",
                    "description": "Reply-to address (optional)"
                },
                "report_name": _REPORT_NAME_SCHEMA
            },
            "required": ["report_id", "recipient_email"]
        }
    )


async def list_reports(
    auth: MagnetCraftAuth,
    controller: ReportViewController,
    page: Optional[int] = None
) -> TextContent:
    """
    Show one page of generated reports.

    Args:
        auth: Authentication manager
        controller: Report view controller
        page: Page to move to, or None for the current page

    Returns:
        TextContent with the report table
    """
    logger.info("MCP tool called: list_reports", page=page)

    denied = await require_admin(auth)
    if denied:
        return denied

    if page is not None and page != controller.current_page:
        await controller.set_page(page)
    else:
        await controller.load_reports()

    state = controller.snapshot()
    if state.error:
        return text(f"❌ {state.error}")

    return text(_format_report_page(state))


async def generate_report(
    auth: MagnetCraftAuth,
    controller: ReportViewController,
    report_name: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None
) -> TextContent:
    """
    Generate a report and show the refreshed report list.

    Args:
        auth: Authentication manager
        controller: Report view controller
        report_name: Name of the new report
        start_date: Optional start of the range
        end_date: Optional end of the range

    Returns:
        TextContent with the outcome and the current page of reports
    """
    logger.info(
        "MCP tool called: generate_report",
        report_name=report_name,
        start_date=start_date,
        end_date=end_date
    )

    denied = await require_admin(auth)
    if denied:
        return denied

    result = await controller.generate_report(report_name or "", start_date or "", end_date or "")

    state = controller.snapshot()
    if result is None or not result.success:
        return text(f"❌ {state.error}")

    # The report exists even when the list refresh afterwards failed.
    if state.error:
        return text(f"✅ {result.message}\n\n"
                    f"⚠️ The report list could not be refreshed: {state.error}")

    return text(f"✅ {result.message}\n\n{_format_report_page(state)}")


async def download_report(
    auth: MagnetCraftAuth,
    controller: ReportViewController,
    report_id: Union[int, str],
    report_name: str = "report"
) -> TextContent:
    """Download the PDF of a report."""
    logger.info("MCP tool called: download_report", report_id=report_id)

    if not validate_report_id(report_id):
        return text("❌ Invalid report ID format")

    denied = await require_admin(auth)
    if denied:
        return denied

    result = await controller.download_pdf(report_id, report_name or "report")
    if not result.success:
        return text(f"❌ {result.message}")

    return text(f"✅ {result.message}\n\n**Saved to:** `{result.data['path']}`")


async def download_chart(
    auth: MagnetCraftAuth,
    controller: ReportViewController,
    report_id: Union[int, str],
    chart_type: str,
    report_name: str = "chart"
) -> TextContent:
    """Download one chart image of a report."""
    logger.info(
        "MCP tool called: download_chart",
        report_id=report_id,
        chart_type=chart_type
    )

    if not validate_report_id(report_id):
        return text("❌ Invalid report ID format")

    denied = await require_admin(auth)
    if denied:
        return denied

    result = await controller.download_chart(report_id, chart_type, report_name or "chart")
    if not result.success:
        return text(f"❌ {result.message}")

    return text(f"✅ {result.message}\n\n**Saved to:** `{result.data['path']}`")


async def email_report(
    auth: MagnetCraftAuth,
    controller: ReportViewController,
    report_id: Union[int, str],
    recipient_email: str,
    sender_email: Optional[str] = None,
    report_name: str = ""
) -> TextContent:
    """
    Email a report through the email dialog flow.

    Args:
        auth: Authentication manager
        controller: Report view controller
        report_id: Report to send
        recipient_email: Address to send it to
        sender_email: Optional reply-to address
        report_name: Report name shown in the dialog

    Returns:
        TextContent with the outcome
    """
    logger.info(
        "MCP tool called: email_report",
        report_id=report_id,
        recipient_email=recipient_email
    )

    if not validate_report_id(report_id):
        return text("❌ Invalid report ID format")

    denied = await require_admin(auth)
    if denied:
        return denied

    controller.open_email_dialog(report_id, report_name or "")
    await controller.send_email(recipient_email or "", sender_email or "")

    state = controller.snapshot()
    if state.error:
        controller.close_email_dialog()
        return text(f"❌ {state.error}")

    return text(f"✅ {state.success}")


def _format_report_page(state: ReportViewState) -> str:
    """Format a page of reports with its pagination footer."""
    if not state.reports:
        return "📋 No reports found. Use `generate_report` to create one."

    lines = ["📋 **Sales Reports**", ""]
    for report in state.reports:
        lines.append(_format_report(report))

    pagination = state.pagination
    if pagination is not None:
        lines.append("")
        lines.append(
            f"**Page {pagination.current_page} of {max(pagination.pages, 1)}** "
            f"({pagination.total} reports)")

    return "\n".join(lines)


def _format_report(report: Report) -> str:
    period = f"{report.start_date or '...'} to {report.end_date or '...'}"
    line = (f"• **{report.name}** (ID: `{report.id}`) | {period} | "
            f"Orders: {report.total_orders:,} | "
            f"Revenue: {format_amount(report.total_revenue)}")
    if report.generated_at:
        line += f" | Generated: {report.generated_at}"
    return line

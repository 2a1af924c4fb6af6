"""Report transport: one backend call per report operation."""

from typing import Any, Awaitable, Callable, Optional

import structlog
from httpx import Response
from pydantic import ValidationError as PydanticValidationError

from ..models.report import EmailRequest, GenerateRequest, Pagination, Report, ReportPage
from ..models.result import OperationResult
from ..utils.api_client import MagnetCraftAPIClient, body_message, response_message
from ..utils.validation import DateInput, ValidationError, first_error_message, validate_page
from .files import ArtifactSaver, chart_filename, pdf_filename

logger = structlog.get_logger(__name__)


class ReportTransport:
    """Report operations against the admin report endpoints.

    Every method returns an ``OperationResult`` and never raises: validation
    problems, error statuses and network failures all come back as failed
    results.
    """

    def __init__(self, client: MagnetCraftAPIClient, saver: ArtifactSaver):
        self.client = client
        self.saver = saver

    async def generate_report(
        self,
        report_name: str,
        start_date: Optional[DateInput] = None,
        end_date: Optional[DateInput] = None
    ) -> OperationResult:
        """Ask the backend to generate a report over an optional date range."""
        try:
            request = GenerateRequest(
                report_name=report_name, start_date=start_date, end_date=end_date)
        except PydanticValidationError as e:
            return OperationResult.invalid(first_error_message(e))

        logger.info("Generating report", report_name=request.report_name,
                    start_date=request.start_date, end_date=request.end_date)

        try:
            response = await self.client.create_report(request.to_payload())
            if not response.is_success:
                return self._failure(response, "Failed to generate report")

            body = response.json()
            return OperationResult.ok(
                body_message(body, "Report generated successfully"), data=body)

        except Exception as e:
            logger.error("Error generating report", error=str(e))
            return OperationResult.network_error(e)

    async def get_all_reports(self, page: int = 1, per_page: int = 10) -> OperationResult:
        """Fetch one page of reports.

        A body without pagination fields gives ``pagination=None``; one
        without ``reports`` gives an empty list. At most ``per_page`` reports
        are returned.
        """
        try:
            validate_page(page, per_page)
        except ValidationError as e:
            return OperationResult.invalid(str(e))

        try:
            response = await self.client.list_reports(page, per_page)
            if not response.is_success:
                return self._failure(response, "Failed to fetch reports")

            body = response.json()
            if not isinstance(body, dict):
                raise ValueError(
                    f"Unexpected report listing body: {type(body).__name__}")

            raw_reports = body.get("reports") or []
            if len(raw_reports) > per_page:
                logger.warning("Backend returned more reports than requested",
                               page=page, per_page=per_page, returned=len(raw_reports))
                raw_reports = raw_reports[:per_page]

            page_data = ReportPage(
                reports=[Report(**item) for item in raw_reports],
                pagination=Pagination.from_response(body)
            )

            return OperationResult.ok(
                body_message(body, "Reports fetched successfully"),
                data=page_data,
                reports=page_data.reports,
                pagination=page_data.pagination
            )

        except Exception as e:
            logger.error("Error fetching reports", page=page, error=str(e))
            return OperationResult.network_error(e)

    async def download_report_pdf(self, report_id: Any, report_name: str = "report") -> OperationResult:
        """Download a report PDF as ``{report_name}_{report_id}.pdf``."""
        return await self._download(
            lambda: self.client.fetch_report_pdf(report_id),
            pdf_filename(report_id, report_name),
            "Report downloaded successfully",
            "Failed to download report"
        )

    async def download_chart(
        self,
        report_id: Any,
        chart_type: str,
        report_name: str = "chart"
    ) -> OperationResult:
        """Download a chart as ``{chart_type}_chart_{report_name}_{report_id}.png``.

        ``chart_type`` (e.g. "revenue", "products") is passed through to the
        backend unchecked.
        """
        return await self._download(
            lambda: self.client.fetch_report_chart(report_id, chart_type),
            chart_filename(report_id, chart_type, report_name),
            f"{chart_type} chart downloaded successfully",
            f"Failed to download {chart_type} chart"
        )

    async def send_report_email(
        self,
        report_id: Any,
        recipient_email: str,
        sender_email: Optional[str] = None
    ) -> OperationResult:
        """Ask the backend to email a report; an absent sender is omitted."""
        try:
            request = EmailRequest(
                recipient_email=recipient_email, sender_email=sender_email)
        except PydanticValidationError as e:
            return OperationResult.invalid(first_error_message(e))

        logger.info("Sending report email", report_id=report_id,
                    recipient_email=request.recipient_email)

        try:
            response = await self.client.email_report(report_id, request.to_payload())
            if not response.is_success:
                return self._failure(response, "Failed to send email")

            body = response.json()
            return OperationResult.ok(
                body_message(body, "Email sent successfully"), data=body)

        except Exception as e:
            logger.error("Error sending email",
                         report_id=report_id, error=str(e))
            return OperationResult.network_error(e)

    async def _download(
        self,
        fetch: Callable[[], Awaitable[Response]],
        filename: str,
        success_message: str,
        failure_message: str
    ) -> OperationResult:
        try:
            response = await fetch()
            # Error bodies are never written to disk
            if not response.is_success:
                return self._failure(response, failure_message)

            path = self.saver.save(response.content, filename)
            return OperationResult.ok(
                success_message, data={"filename": filename, "path": str(path)})

        except Exception as e:
            logger.error("Error downloading artifact",
                         filename=filename, error=str(e))
            return OperationResult.network_error(e)

    @staticmethod
    def _failure(response: Response, default: str) -> OperationResult:
        message = response_message(response, default)
        logger.error(
            "Report request failed",
            status_code=response.status_code,
            message=message
        )
        return OperationResult.failed(message, error=f"HTTP {response.status_code}")

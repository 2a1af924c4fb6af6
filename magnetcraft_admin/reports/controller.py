"""View state for the admin report manager."""

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Tuple

import structlog
from pydantic import BaseModel, Field

from ..models.report import Pagination, Report
from ..models.result import OperationResult
from ..utils.validation import ValidationError, is_blank, normalize_optional_timestamp
from .transport import ReportTransport

logger = structlog.get_logger(__name__)

REPORT_NAME_REQUIRED = "Report name is required"
RECIPIENT_REQUIRED = "Recipient email is required"
NO_REPORT_SELECTED = "No report selected"


class GenerateForm(BaseModel):
    """Buffer of the "generate report" form."""

    report_name: str = ""
    start_date: str = ""
    end_date: str = ""


class EmailForm(BaseModel):
    """Buffer of the "email report" dialog."""

    recipient_email: str = ""
    sender_email: str = ""


class EmailDialog(BaseModel):
    """Which report the email dialog is open for."""

    show: bool = False
    report_id: Optional[Any] = None
    report_name: str = ""


class ReportViewState(BaseModel):
    """Immutable snapshot of everything the report manager displays."""

    reports: Tuple[Report, ...] = ()
    pagination: Optional[Pagination] = None
    current_page: int = 1
    loading: bool = False
    error: str = ""
    success: str = ""
    show_generate_form: bool = False
    report_form: GenerateForm = Field(default_factory=GenerateForm)
    email_form: EmailForm = Field(default_factory=EmailForm)
    email_dialog: EmailDialog = Field(default_factory=EmailDialog)

    class Config:
        frozen = True


class ReportViewController:
    """Sequences report actions and reconciles their results into view state.

    Each action clears both banners, runs one transport call and then sets
    either the success or the error banner. Failed actions leave the list,
    pagination and dialogs as they were. Validation failures short-circuit
    before any transport call.

    List fetches carry an increasing token; a response that is not for the
    latest fetch is discarded so an older page never overwrites a newer one.
    """

    def __init__(self, transport: ReportTransport, per_page: int = 10):
        self.transport = transport
        self.per_page = per_page

        self.reports: List[Report] = []
        self.pagination: Optional[Pagination] = None
        self.current_page = 1
        self.error = ""
        self.success = ""

        self.show_generate_form = False
        self.report_form = GenerateForm()
        self.email_form = EmailForm()
        self.email_dialog = EmailDialog()

        self._in_flight = 0
        self._list_token = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    def snapshot(self) -> ReportViewState:
        return ReportViewState(
            reports=tuple(self.reports),
            pagination=self.pagination,
            current_page=self.current_page,
            loading=self.loading,
            error=self.error,
            success=self.success,
            show_generate_form=self.show_generate_form,
            report_form=self.report_form.model_copy(),
            email_form=self.email_form.model_copy(),
            email_dialog=self.email_dialog.model_copy()
        )

    @contextmanager
    def _action(self, name: str) -> Iterator[None]:
        self.error = ""
        self.success = ""
        self._in_flight += 1
        logger.info("Report action started", action=name)
        try:
            yield
        finally:
            self._in_flight -= 1

    def _reject(self, message: str) -> None:
        logger.warning("Report action rejected", reason=message)
        self.success = ""
        self.error = message

    def _settle(self, result: OperationResult, success_message: Optional[str] = None) -> None:
        if result.success:
            self.success = success_message or result.message
        else:
            self.error = result.message

    # Listing

    async def load_reports(self) -> OperationResult:
        """Fetch the current page, replacing the list and pagination."""
        with self._action("load_reports"):
            return await self._fetch_page(self.current_page)

    async def _fetch_page(self, page: int) -> OperationResult:
        self._list_token += 1
        token = self._list_token

        result = await self.transport.get_all_reports(page, self.per_page)

        if token != self._list_token:
            logger.info("Discarding stale report page", page=page)
            return result

        if result.success:
            self.reports = list(result.reports)
            self.pagination = result.pagination
        else:
            self.error = result.message
        return result

    async def set_page(self, page: int) -> Optional[OperationResult]:
        """Move the page cursor and refetch; the current page is a no-op."""
        if page == self.current_page:
            return None

        last_page = self.pagination.pages if self.pagination else None
        if page < 1 or (last_page is not None and page > max(last_page, 1)):
            self._reject(f"Page {page} is out of range")
            return None

        self.current_page = page
        return await self.load_reports()

    async def next_page(self) -> Optional[OperationResult]:
        if self.pagination is None or self.current_page >= self.pagination.pages:
            return None
        return await self.set_page(self.current_page + 1)

    async def previous_page(self) -> Optional[OperationResult]:
        if self.current_page <= 1:
            return None
        return await self.set_page(self.current_page - 1)

    # Generate

    def toggle_generate_form(self) -> None:
        self.show_generate_form = not self.show_generate_form

    def update_report_form(self, **fields: str) -> None:
        self.report_form = self.report_form.model_copy(update=fields)

    async def generate_report(
        self,
        report_name: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None
    ) -> Optional[OperationResult]:
        """Submit the generate form, optionally filling it first.

        On success the form is closed and cleared and the current page is
        refreshed. Returns None when validation stops the submission.
        """
        updates = {
            key: value for key, value in (
                ("report_name", report_name),
                ("start_date", start_date),
                ("end_date", end_date),
            ) if value is not None
        }
        if updates:
            self.update_report_form(**updates)

        form = self.report_form
        if is_blank(form.report_name):
            self._reject(REPORT_NAME_REQUIRED)
            return None

        try:
            start = normalize_optional_timestamp(form.start_date)
            end = normalize_optional_timestamp(form.end_date)
        except ValidationError as e:
            self._reject(str(e))
            return None

        with self._action("generate_report"):
            result = await self.transport.generate_report(form.report_name, start, end)
            self._settle(result)
            if result.success:
                self.show_generate_form = False
                self.report_form = GenerateForm()
                await self._fetch_page(self.current_page)
            return result

    # Downloads

    async def download_pdf(self, report_id: Any, report_name: str) -> OperationResult:
        with self._action("download_pdf"):
            result = await self.transport.download_report_pdf(report_id, report_name)
            self._settle(result)
            return result

    async def download_chart(self, report_id: Any, chart_type: str, report_name: str) -> OperationResult:
        with self._action("download_chart"):
            result = await self.transport.download_chart(report_id, chart_type, report_name)
            self._settle(result)
            return result

    # Email

    def open_email_dialog(self, report_id: Any, report_name: str) -> None:
        self.email_dialog = EmailDialog(
            show=True, report_id=report_id, report_name=report_name)

    def close_email_dialog(self) -> None:
        self.email_dialog = EmailDialog()
        self.email_form = EmailForm()

    def update_email_form(self, **fields: str) -> None:
        self.email_form = self.email_form.model_copy(update=fields)

    async def send_email(
        self,
        recipient_email: Optional[str] = None,
        sender_email: Optional[str] = None
    ) -> Optional[OperationResult]:
        """Send the report targeted by the email dialog.

        On success the dialog is closed and its form cleared. Returns None
        when validation stops the submission.
        """
        updates = {
            key: value for key, value in (
                ("recipient_email", recipient_email),
                ("sender_email", sender_email),
            ) if value is not None
        }
        if updates:
            self.update_email_form(**updates)

        form = self.email_form
        if is_blank(form.recipient_email):
            self._reject(RECIPIENT_REQUIRED)
            return None

        report_id = self.email_dialog.report_id
        if report_id is None:
            self._reject(NO_REPORT_SELECTED)
            return None

        recipient = form.recipient_email.strip()
        sender = form.sender_email.strip() or None

        with self._action("send_email"):
            result = await self.transport.send_report_email(report_id, recipient, sender)
            self._settle(
                result, f"Report sent successfully to {recipient}")
            if result.success:
                self.close_email_dialog()
            return result

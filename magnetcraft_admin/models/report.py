"""Sales report data models."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from ..utils.validation import is_blank, normalize_optional_timestamp

ReportId = Union[int, str]


class Report(BaseModel):
    """Sales report generated by the backend."""

    id: ReportId = Field(..., description="Report ID")
    name: str = Field(..., alias="report_name", description="Report name")
    start_date: Optional[str] = Field(
        None, description="Start of the reporting period")
    end_date: Optional[str] = Field(
        None, description="End of the reporting period")
    total_orders: int = Field(0, description="Orders covered by the report")
    total_revenue: float = Field(
        0.0, description="Revenue covered by the report")
    generated_at: Optional[str] = Field(
        None, description="Generation timestamp")

    class Config:
        populate_by_name = True
        frozen = True
        json_schema_extra = {
            "example": {
                "id": 42,
                "report_name": "Monthly",
                "start_date": "2024-12-01T00:00:00.000Z",
                "end_date": "2024-12-31T00:00:00.000Z",
                "total_orders": 128,
                "total_revenue": 153600.0,
                "generated_at": "2025-01-01T08:00:00"
            }
        }


class Pagination(BaseModel):
    """Pagination block of a report listing."""

    total: int = Field(..., description="Total number of reports")
    pages: int = Field(..., description="Total number of pages")
    current_page: int = Field(..., description="Page these reports belong to")

    class Config:
        frozen = True

    @classmethod
    def from_response(cls, body: Dict[str, Any]) -> Optional["Pagination"]:
        """Read pagination from a nested ``pagination`` block or top-level fields.

        Returns None when the response carries no pagination.
        """
        block = body.get("pagination")
        if isinstance(block, dict):
            return cls(**block)

        if all(key in body for key in ("total", "pages", "current_page")):
            return cls(
                total=body["total"],
                pages=body["pages"],
                current_page=body["current_page"]
            )

        return None


class ReportPage(BaseModel):
    """One page of reports; replaced wholesale on every page fetch."""

    reports: List[Report] = Field(
        default_factory=list, description="Reports on this page")
    pagination: Optional[Pagination] = Field(
        None, description="Pagination, if the backend provided it")


class GenerateRequest(BaseModel):
    """Payload for generating a new report."""

    report_name: str = Field(..., description="Report name")
    start_date: Optional[str] = Field(
        None, description="Period start, normalized to UTC ISO-8601")
    end_date: Optional[str] = Field(
        None, description="Period end, normalized to UTC ISO-8601")

    @field_validator("report_name")
    @classmethod
    def _name_required(cls, value: str) -> str:
        if is_blank(value):
            raise ValueError("Report name is required")
        return value

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> Optional[str]:
        return normalize_optional_timestamp(value)

    def to_payload(self) -> Dict[str, Any]:
        """Build the request body; absent dates are omitted."""
        return self.model_dump(exclude_none=True)


class EmailRequest(BaseModel):
    """Payload for emailing a report."""

    recipient_email: str = Field(..., description="Recipient address")
    sender_email: Optional[str] = Field(
        None, description="Sender address; backend default when omitted")

    @field_validator("recipient_email")
    @classmethod
    def _recipient_required(cls, value: str) -> str:
        if is_blank(value):
            raise ValueError("Recipient email is required")
        return value.strip()

    @field_validator("sender_email")
    @classmethod
    def _blank_sender_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if is_blank(value):
            return None
        return value.strip()

    def to_payload(self) -> Dict[str, Any]:
        """Build the request body; an absent sender is omitted."""
        return self.model_dump(exclude_none=True)

"""Uniform result envelope for backend operations."""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from .report import Pagination, Report

NETWORK_ERROR_MESSAGE = "Network error occurred"


class ErrorKind(str, Enum):
    """Why an operation failed."""

    VALIDATION = "validation"
    TRANSPORT = "transport"
    NETWORK = "network"


class OperationResult(BaseModel):
    """Success/failure envelope returned by every client operation.

    ``success`` is True only when the backend answered with a success status
    and the body parsed. Failures never raise; they carry a user-facing
    ``message`` and, for diagnostics, the raw ``error`` detail.
    """

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="User-facing status message")
    data: Optional[Any] = Field(None, description="Operation payload")
    reports: List[Report] = Field(
        default_factory=list, description="Reports, for listing operations")
    pagination: Optional[Pagination] = Field(
        None, description="Pagination, for listing operations")
    error: Optional[str] = Field(None, description="Diagnostic error detail")
    error_kind: Optional[ErrorKind] = Field(
        None, description="Failure category")

    @classmethod
    def ok(cls, message: str, **fields: Any) -> "OperationResult":
        return cls(success=True, message=message, **fields)

    @classmethod
    def failed(
        cls,
        message: str,
        kind: ErrorKind = ErrorKind.TRANSPORT,
        error: Optional[str] = None,
        **fields: Any
    ) -> "OperationResult":
        return cls(success=False, message=message, error=error, error_kind=kind, **fields)

    @classmethod
    def invalid(cls, message: str) -> "OperationResult":
        return cls.failed(message, kind=ErrorKind.VALIDATION, error=message)

    @classmethod
    def network_error(cls, exc: BaseException) -> "OperationResult":
        return cls.failed(
            NETWORK_ERROR_MESSAGE,
            kind=ErrorKind.NETWORK,
            error=str(exc) or type(exc).__name__
        )

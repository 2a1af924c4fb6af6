"""Input validation utilities."""

import re
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError as PydanticValidationError

MIN_PASSWORD_LENGTH = 8

DateInput = Union[str, date, datetime]


class ValidationError(ValueError):
    """Custom validation error."""
    pass


def is_blank(value: Optional[str]) -> bool:
    """Return True for None, empty or whitespace-only strings."""
    return value is None or not str(value).strip()


def validate_email(email: str) -> bool:
    """Validate email format."""
    if not email:
        return False

    # Basic email regex pattern, no consecutive dots
    pattern = r'^[a-zA-Z0-9_%+-]+(\.[a-zA-Z0-9_%+-]+)*@[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)*\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email.strip()))


def validate_report_id(report_id: Any) -> bool:
    """Validate report ID format."""
    if report_id is None or isinstance(report_id, bool):
        return False

    if isinstance(report_id, int):
        return report_id >= 0

    # Report IDs are numeric or slug-like strings
    pattern = r'^[a-zA-Z0-9_-]+$'
    return bool(re.match(pattern, str(report_id)))


def validate_page(page: int, per_page: int) -> None:
    """Validate pagination arguments."""
    if page < 1:
        raise ValidationError("page must be at least 1")
    if per_page < 1:
        raise ValidationError("per_page must be at least 1")


def normalize_timestamp(value: DateInput) -> str:
    """Normalize a date or timestamp to a UTC ISO-8601 string.

    Output matches the canonical browser form, e.g. ``2024-01-31T00:00:00.000Z``.
    Date-only values and naive datetimes are taken as UTC.

    Raises:
        ValidationError: if the value cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    else:
        text = str(value).strip()
        if not text:
            raise ValidationError("Empty date value")
        try:
            if re.match(r'^\d{4}-\d{2}-\d{2}$', text):
                parsed = datetime.combine(date.fromisoformat(text), time.min)
            else:
                parsed = datetime.fromisoformat(text.replace('Z', '+00:00'))
        except ValueError:
            raise ValidationError(f"Invalid date: {value}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    parsed = parsed.astimezone(timezone.utc)

    millis = parsed.microsecond // 1000
    return f"{parsed.strftime('%Y-%m-%dT%H:%M:%S')}.{millis:03d}Z"


def normalize_optional_timestamp(value: Optional[DateInput]) -> Optional[str]:
    """Normalize a timestamp, mapping absent or blank values to None."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return normalize_timestamp(value)


def check_password(password: str, confirm_password: Optional[str] = None) -> Optional[str]:
    """Return an error message for an unacceptable password, else None."""
    if confirm_password is not None and password != confirm_password:
        return "Passwords do not match."

    if len(password or "") < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."

    if not re.search(r'[a-zA-Z]', password) or not re.search(r'\d', password):
        return "Password must contain both letters and numbers."

    return None


def first_error_message(error: PydanticValidationError) -> str:
    """Human-readable message of the first failed field."""
    errors = error.errors()
    if not errors:
        return str(error)
    return errors[0].get("msg", str(error)).removeprefix("Value error, ")


def validate_required_fields(data: Dict[str, Any], required_fields: list[str]) -> None:
    """Validate that required fields are present and not blank."""
    missing_fields = []

    for field in required_fields:
        if field not in data or is_blank(data[field]):
            missing_fields.append(field)

    if missing_fields:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing_fields)}")

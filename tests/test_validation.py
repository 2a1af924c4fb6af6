"""Tests for validation utilities."""

from datetime import date, datetime, timedelta, timezone

import pytest

from magnetcraft_admin.utils.validation import (
    ValidationError,
    check_password,
    is_blank,
    normalize_optional_timestamp,
    normalize_timestamp,
    validate_email,
    validate_page,
    validate_report_id,
    validate_required_fields,
)


class TestEmailValidation:
    """Test email validation functions."""

    def test_valid_emails(self):
        """Test valid email addresses."""
        valid_emails = [
            "test@example.com",
            "user.name@domain.co.uk",
            "user+tag@example.org",
            "123@numbers.com",
        ]

        for email in valid_emails:
            assert validate_email(email) is True

    def test_invalid_emails(self):
        """Test invalid email addresses."""
        invalid_emails = [
            "",
            "invalid-email",
            "@example.com",
            "user@",
            "user..name@example.com",
        ]

        for email in invalid_emails:
            assert validate_email(email) is False


class TestReportIDValidation:
    """Test report ID validation functions."""

    def test_valid_report_ids(self):
        """Test valid report IDs."""
        for report_id in [42, 0, "42", "monthly-2024", "report_7"]:
            assert validate_report_id(report_id) is True

    def test_invalid_report_ids(self):
        """Test invalid report IDs."""
        for report_id in [None, True, -1, "", "report 7", "../etc"]:
            assert validate_report_id(report_id) is False


class TestTimestampNormalization:
    """Test date normalization to UTC ISO-8601."""

    def test_date_only_is_midnight_utc(self):
        assert normalize_timestamp("2024-01-31") == "2024-01-31T00:00:00.000Z"

    def test_zulu_timestamp_keeps_milliseconds(self):
        assert normalize_timestamp("2024-12-01T08:30:15.250Z") == "2024-12-01T08:30:15.250Z"

    def test_offset_is_converted_to_utc(self):
        assert normalize_timestamp("2024-12-01T03:00:00+03:00") == "2024-12-01T00:00:00.000Z"

    def test_date_and_datetime_objects(self):
        assert normalize_timestamp(date(2024, 2, 29)) == "2024-02-29T00:00:00.000Z"

        aware = datetime(2024, 6, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        assert normalize_timestamp(aware) == "2024-06-01T10:00:00.000Z"

    def test_invalid_date_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            normalize_timestamp("31/01/2024")

        assert "Invalid date" in str(exc_info.value)

    def test_optional_blank_is_none(self):
        assert normalize_optional_timestamp(None) is None
        assert normalize_optional_timestamp("   ") is None
        assert normalize_optional_timestamp("2024-01-01") == "2024-01-01T00:00:00.000Z"


class TestPasswordCheck:
    """Test password rules."""

    def test_acceptable_password(self):
        assert check_password("magnet123", "magnet123") is None
        assert check_password("magnet123") is None

    def test_mismatch(self):
        assert check_password("magnet123", "magnet124") == "Passwords do not match."

    def test_too_short(self):
        assert check_password("abc123") == "Password must be at least 8 characters long."

    def test_letters_and_numbers_required(self):
        assert check_password("abcdefgh") == "Password must contain both letters and numbers."
        assert check_password("12345678") == "Password must contain both letters and numbers."


class TestPageValidation:
    """Test pagination argument checks."""

    def test_valid_page(self):
        # Should not raise an exception
        validate_page(1, 10)

    @pytest.mark.parametrize("page,per_page", [(0, 10), (1, 0), (-3, 5)])
    def test_invalid_page(self, page, per_page):
        with pytest.raises(ValidationError):
            validate_page(page, per_page)


class TestRequiredFieldsValidation:
    """Test required fields validation functions."""

    def test_valid_required_fields(self):
        """Test valid required fields."""
        data = {"name": "test", "email": "test@example.com"}
        required_fields = ["name", "email"]

        # Should not raise an exception
        validate_required_fields(data, required_fields)

    def test_missing_required_fields(self):
        """Test missing required fields."""
        data = {"name": "test", "email": "  "}
        required_fields = ["name", "email", "phone"]

        with pytest.raises(ValidationError) as exc_info:
            validate_required_fields(data, required_fields)

        assert "Missing required fields: email, phone" in str(exc_info.value)

    def test_is_blank(self):
        assert is_blank(None) is True
        assert is_blank(" \t") is True
        assert is_blank("x") is False

"""Configuration settings for the MagnetCraft admin client."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    magnetcraft_api_url: str = Field(
        default="http://localhost:5000/api",
        description="MagnetCraft backend API origin"
    )

    # Report Endpoints
    admin_reports_endpoint: str = Field(
        default="/admin/reports",
        description="Report collection endpoint (generate, list)"
    )
    admin_report_download_endpoint: str = Field(
        default="/admin/reports/{report_id}/download",
        description="Report PDF download endpoint"
    )
    admin_report_chart_endpoint: str = Field(
        default="/admin/reports/{report_id}/charts/{chart_type}",
        description="Report chart image endpoint"
    )
    admin_report_email_endpoint: str = Field(
        default="/admin/reports/{report_id}/email",
        description="Report email dispatch endpoint"
    )

    # Admin Data Endpoints
    admin_users_endpoint: str = Field(
        default="/admin/users",
        description="Admin user listing endpoint"
    )
    admin_orders_endpoint: str = Field(
        default="/admin/orders",
        description="Admin paginated order listing endpoint"
    )

    # Auth Endpoints
    auth_login_endpoint: str = Field(
        default="/auth/login",
        description="Login endpoint"
    )
    auth_register_endpoint: str = Field(
        default="/auth/register",
        description="Signup endpoint"
    )
    auth_me_endpoint: str = Field(
        default="/auth/me",
        description="Current user endpoint"
    )
    auth_forgot_password_endpoint: str = Field(
        default="/auth/forgot-password",
        description="Password reset request endpoint"
    )
    auth_reset_password_endpoint: str = Field(
        default="/auth/reset-password/{token}",
        description="Password reset token endpoint"
    )
    auth_logout_endpoint: str = Field(
        default="/auth/logout",
        description="Logout endpoint"
    )

    # Authentication
    magnetcraft_email: Optional[str] = Field(
        default=None,
        description="Admin account email used for tool auto-login"
    )
    magnetcraft_password: Optional[str] = Field(
        default=None,
        description="Admin account password used for tool auto-login"
    )

    # Report Configuration
    reports_per_page: int = Field(
        default=10,
        description="Reports fetched per page"
    )
    download_dir: str = Field(
        default="downloads",
        description="Directory where downloaded reports and charts are saved"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    # Server Configuration
    mcp_server_name: str = Field(
        default="magnetcraft-admin",
        description="MCP server name"
    )

    # HTTP Client Configuration
    api_timeout: int = Field(
        default=10000,
        description="API request timeout in milliseconds"
    )
    max_retries: int = Field(
        default=3,
        description="Retries for requests that fail to connect"
    )
    retry_backoff: float = Field(
        default=1.0,
        description="Base delay in seconds for exponential retry backoff"
    )


# Global settings instance
settings = Settings()

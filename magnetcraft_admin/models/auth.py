"""Authentication data models."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator


class Role(str, Enum):
    """Account role."""

    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"
    STAFF = "STAFF"


class User(BaseModel):
    """Signed-in account as returned by the auth endpoints."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="Account email")
    name: str = Field(..., description="Display name")
    role: Role = Field(..., description="Account role")
    created_at: Optional[str] = Field(None, description="Date joined")
    updated_at: Optional[str] = Field(None, description="Last update time")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def is_admin(self) -> bool:
        """Whether the account may open the admin dashboard."""
        return self.role == Role.ADMIN

    @classmethod
    def from_response(cls, body: Any) -> Optional["User"]:
        """Extract a user from a bare user body or a ``{"user": ...}`` envelope.

        Returns None when neither shape holds a valid user.
        """
        if not isinstance(body, dict):
            return None

        for candidate in (body.get("user"), body):
            if not isinstance(candidate, dict):
                continue
            try:
                return cls(**candidate)
            except ValidationError:
                continue

        return None

    class Config:
        json_schema_extra = {
            "example": {
                "id": "1",
                "email": "admin@magnetcraft.co.ke",
                "name": "Store Admin",
                "role": "ADMIN",
                "created_at": "2024-01-15T10:30:00Z"
            }
        }


class AuthState:
    """Authentication state manager.

    The backend session itself lives in the HTTP client's cookie jar; this
    holds the user that session belongs to.
    """

    def __init__(self):
        self.user: Optional[User] = None

    def is_authenticated(self) -> bool:
        """Check if a user is signed in."""
        return self.user is not None

    def is_admin(self) -> bool:
        """Check if the signed-in user is an admin."""
        return self.user is not None and self.user.is_admin

    def update_from_user(self, user: Optional[User]) -> None:
        """Update authentication state from an API response."""
        self.user = user

    def clear(self) -> None:
        """Clear authentication state."""
        self.user = None

"""MagnetCraft session authentication handling."""

from typing import Optional

import structlog

from ..models.auth import AuthState, User
from ..models.result import OperationResult
from ..utils.api_client import MagnetCraftAPIClient, body_message, response_message
from ..utils.validation import check_password, is_blank, validate_email

logger = structlog.get_logger(__name__)

LOGIN_FAILED = "Login failed. Please check your credentials."


class MagnetCraftAuth:
    """Session authentication manager.

    The session is a backend cookie held by the API client; the signed-in
    user is tracked in ``auth_state``. All operations return an
    ``OperationResult`` instead of raising.
    """

    def __init__(self, client: MagnetCraftAPIClient, auth_state: AuthState):
        self.client = client
        self.auth_state = auth_state

    @property
    def current_user(self) -> Optional[User]:
        return self.auth_state.user

    def is_authenticated(self) -> bool:
        """Check if a user is currently signed in."""
        return self.auth_state.is_authenticated()

    async def login(self, email: str, password: str) -> OperationResult:
        """Sign in with email and password."""
        logger.info("Attempting login", email=email)

        if not validate_email(email):
            return OperationResult.invalid("Invalid email format")

        if is_blank(password):
            return OperationResult.invalid("Password is required")

        try:
            response = await self.client.login(email.strip(), password)
            if not response.is_success:
                self.auth_state.clear()
                message = response_message(response, LOGIN_FAILED)
                logger.warning("Login rejected",
                               status_code=response.status_code)
                return OperationResult.failed(message, error=f"HTTP {response.status_code}")

            # Prefer the user in the login response, then ask /auth/me
            user = User.from_response(response.json())
            if user is None:
                user = await self._fetch_current_user()

            if user is None:
                self.auth_state.clear()
                return OperationResult.failed(LOGIN_FAILED)

            self.auth_state.update_from_user(user)
            logger.info("Login successful", user_id=user.id, role=user.role.value)
            return OperationResult.ok(
                "Welcome back! You have successfully logged in.", data=user)

        except Exception as e:
            logger.error("Login failed", error=str(e))
            self.auth_state.clear()
            return OperationResult.network_error(e)

    async def signup(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        city: Optional[str] = None
    ) -> OperationResult:
        """Register a new customer account."""
        if is_blank(name):
            return OperationResult.invalid("Name is required")

        if not validate_email(email):
            return OperationResult.invalid("Invalid email format")

        password_error = check_password(password, confirm_password)
        if password_error:
            return OperationResult.invalid(password_error)

        payload = {
            "name": name.strip(),
            "email": email.strip(),
            "password": password,
            "phone": phone,
            "address": address,
            "city": city,
        }
        payload = {key: value for key, value in payload.items()
                   if value is not None}

        try:
            response = await self.client.register(payload)
            if not response.is_success:
                return OperationResult.failed(
                    response_message(response, "An error occurred. Please try again."),
                    error=f"HTTP {response.status_code}"
                )

            user = User.from_response(response.json())
            if user is not None:
                self.auth_state.update_from_user(user)

            logger.info("Signup successful", email=email)
            return OperationResult.ok(
                "Account created successfully! Please check your email for verification.",
                data=user
            )

        except Exception as e:
            logger.error("Signup failed", error=str(e))
            return OperationResult.network_error(e)

    async def forgot_password(self, email: str) -> OperationResult:
        """Request a password reset link."""
        if not validate_email(email):
            return OperationResult.invalid("Invalid email format")

        try:
            response = await self.client.forgot_password(email.strip())
            if not response.is_success:
                return OperationResult.failed(
                    response_message(response, "Failed to send reset link."),
                    error=f"HTTP {response.status_code}"
                )

            return OperationResult.ok(
                body_message(response.json(), "Password reset link sent to your email!"))

        except Exception as e:
            logger.error("Forgot password request failed", error=str(e))
            return OperationResult.network_error(e)

    async def validate_reset_token(self, token: str) -> OperationResult:
        """Check a password reset token before asking for a new password."""
        if is_blank(token):
            return OperationResult.invalid("Reset token is required")

        try:
            response = await self.client.validate_reset_token(token)
            if not response.is_success:
                return OperationResult.failed(
                    response_message(
                        response,
                        "Invalid or expired reset token. Please request a new password reset."
                    ),
                    error=f"HTTP {response.status_code}"
                )

            return OperationResult.ok(
                body_message(response.json(),
                             "Token is valid. You can now reset your password."))

        except Exception as e:
            logger.error("Reset token validation failed", error=str(e))
            return OperationResult.network_error(e)

    async def reset_password(
        self,
        token: str,
        password: str,
        confirm_password: Optional[str] = None
    ) -> OperationResult:
        """Set a new password using a reset token."""
        if is_blank(token):
            return OperationResult.invalid("Reset token is required")

        password_error = check_password(password, confirm_password)
        if password_error:
            return OperationResult.invalid(password_error)

        try:
            response = await self.client.reset_password(token, password)
            if not response.is_success:
                return OperationResult.failed(
                    response_message(response, "Failed to reset password."),
                    error=f"HTTP {response.status_code}"
                )

            return OperationResult.ok(
                body_message(response.json(), "Password reset successful!"))

        except Exception as e:
            logger.error("Password reset failed", error=str(e))
            return OperationResult.network_error(e)

    async def refresh_user(self) -> Optional[User]:
        """Reload the signed-in user from the session cookie."""
        try:
            user = await self._fetch_current_user()
        except Exception as e:
            logger.error("Failed to refresh user", error=str(e))
            user = None

        self.auth_state.update_from_user(user)
        return user

    async def _fetch_current_user(self) -> Optional[User]:
        response = await self.client.get_current_user()
        if not response.is_success:
            return None
        return User.from_response(response.json())

    async def logout(self) -> None:
        """End the session; local state is cleared even if the call fails."""
        logger.info("Logging out user")
        try:
            await self.client.logout()
        except Exception as e:
            logger.error("Logout request failed", error=str(e))
        finally:
            self.auth_state.clear()
            self.client.clear_session()

    async def ensure_authenticated(self) -> bool:
        """Ensure a user is signed in, trying the existing session first."""
        if self.is_authenticated():
            return True

        if await self.refresh_user():
            return True

        logger.warning("User is not authenticated")
        return False

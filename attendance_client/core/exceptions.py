from typing import Dict, Optional


class ApiError(Exception):
    """Base class for every failure of a remote call."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationError(ApiError):
    """Raised on a 401. The session has already been cleared when this is seen."""


class ValidationError(ApiError):
    """Raised when input is rejected, either locally or by the server (400)."""

    def __init__(
        self,
        message: str,
        errors: Optional[Dict[str, str]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, status_code)
        self.errors = errors or {}


class NetworkError(ApiError):
    """Raised on timeout or connection failure. Never retried."""


class BusinessRuleError(ApiError):
    """Raised when the server refuses an otherwise valid call (403, 404, 409, success=false)."""


class ClockActionInProgress(Exception):
    """Raised when a clock action is issued while another one is outstanding."""


GENERIC_NETWORK_MESSAGE = "Could not reach the server. Please check your connection and try again."


def user_message(exc: Exception) -> str:
    """Translate a client error into the message shown next to the action that failed."""
    if isinstance(exc, AuthenticationError):
        return "Your session has expired. Please log in again."
    if isinstance(exc, NetworkError):
        return GENERIC_NETWORK_MESSAGE
    if isinstance(exc, ValidationError):
        if exc.errors:
            details = ", ".join(f"{field}: {msg}" for field, msg in exc.errors.items())
            return f"{exc.message} ({details})"
        return exc.message
    if isinstance(exc, ClockActionInProgress):
        return "A clock action is already being processed."
    if isinstance(exc, ApiError):
        return exc.message
    return f"Unexpected error: {exc}"

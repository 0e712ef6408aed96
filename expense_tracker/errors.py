"""Domain exceptions shared by the services, the API and the CLI."""

from typing import Any, List, Optional


class TrackerError(Exception):
    """Base exception with a user-facing message.

    Attributes:
        message: Message passed through to API clients and CLI output
        recovery_hint: Optional hint for recovering from the error
        status_code: HTTP status the API renders this error with
    """

    status_code = 500

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class NotFoundError(TrackerError):
    """A record does not exist or is owned by another user."""

    status_code = 404


class ValidationFailedError(TrackerError):
    """Input violates a business rule.

    Attributes:
        issues: Individual problems, as strings, for API clients to display
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        issues: Optional[List[Any]] = None,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(message, recovery_hint)
        self.issues = [str(issue) for issue in issues or []]


class ConflictError(TrackerError):
    """A unique value is already taken (for example a registered email)."""

    status_code = 400


class AuthenticationError(TrackerError):
    """Credentials or token are missing, invalid or expired."""

    status_code = 401


class EmailDeliveryError(TrackerError):
    """An outgoing email could not be delivered."""

    status_code = 500

from .constants import INVALID_CREDENTIALS_MESSAGE


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when the caller has no valid session."""

    status_code = 401


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials are invalid.

    The message never says which of id/password was wrong.
    """

    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS_MESSAGE)


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class InvalidStateTransitionError(DomainError):
    """Raised when a workflow item is moved out of a terminal state."""

    status_code = 409

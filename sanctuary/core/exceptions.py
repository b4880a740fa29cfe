class DomainError(Exception):
    """Base exception for check-in rule violations.

    ``status_code`` is the HTTP status the API answers with when the error
    reaches the application boundary.
    """

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError, ValueError):
    """Raised when input is rejected before any database call is made.

    Also a ``ValueError`` so pydantic field validators report it as a
    validation failure.
    """

    status_code = 400


class NotFoundError(DomainError):
    """Raised when a session, student or check-in record does not exist."""

    status_code = 404


class CheckinStateError(DomainError):
    """Raised when an operation does not fit the record's current state."""

    status_code = 409


class PersistenceError(DomainError):
    """Raised when a read or write against the database failed.

    The message names the attempted action so the operator can retry it.
    """

    status_code = 503

from __future__ import annotations


# PUBLIC_INTERFACE
class TodoApiError(Exception):
    """
    Base class for errors surfaced to clients as {"error": "<message>"}.

    Subclasses pin the HTTP status code used by the exception handler in main.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequest(TodoApiError):
    """Malformed query string or request body."""

    status_code = 400


class MalformedRow(TodoApiError):
    """A database row violates the decode contract."""


class DatabaseError(TodoApiError):
    """Connection or query execution failure."""


class InternalInconsistency(TodoApiError):
    """The database answered with something the handlers cannot use."""

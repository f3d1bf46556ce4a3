"""
Error taxonomy for the Stock UI.

ValidationError is raised before any request is made. AuthError means the
back end rejected a login or a stored token. NetworkError and RemoteError
cover every other failed call; they are caught by the component that issued
the call and turned into a notice.
"""


class StockUIError(Exception):
    """Base class for all errors raised by the Stock UI core."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StockUIError):
    """Local input check failed; submission is blocked."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class AuthError(StockUIError):
    """Login or token verification was rejected."""


class NetworkError(StockUIError):
    """The back end could not be reached."""


class RemoteError(StockUIError):
    """
    The back end answered with a non-success status.

    Attributes:
        status_code: HTTP status code of the response.
        code: Machine readable error code from the body, if any.
    """

    def __init__(self, message: str, status_code: int, code: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code

    def __str__(self) -> str:
        return f"{self.message} (HTTP {self.status_code})"


class NotFoundError(RemoteError):
    """The requested entity does not exist."""

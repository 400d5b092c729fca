"""Custom exceptions for pyhmdm."""


class PyHmDmException(Exception):
    """Base class for pyhmdm exceptions."""


class AuthError(PyHmDmException):
    """Raised when authentication fails."""


class ApiError(PyHmDmException):
    """Raised when a call to the attribute store fails."""

    def __init__(self, status_code: int, error_message: str) -> None:
        """Initialize the API error."""
        self.status_code = status_code
        self.error_message = error_message
        super().__init__(f"API Error {status_code}: {error_message}")

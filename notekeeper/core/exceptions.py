"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
The note service converts these into outcome values; none of them
escape a NoteService operation.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(ApplicationError):
    """Raised when input validation fails before any request is made."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class AuthenticationError(ApplicationError):
    """Raised when no principal can be resolved for the session."""

    def __init__(self, message: str = "User not authenticated") -> None:
        super().__init__(message, code="AUTH_UNAUTHORIZED")


class RemoteQueryError(ApplicationError):
    """Raised when the backend reports a failure for a table operation."""

    def __init__(
        self,
        message: str = "Remote query failed",
        status_code: int | None = None,
        code: str = "SYS_REMOTE_QUERY_ERROR",
    ) -> None:
        self.status_code = status_code
        super().__init__(message, code=code)


class NotFoundError(RemoteQueryError):
    """Raised when a filtered write matched no row visible to the principal."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ConfigurationError(ApplicationError):
    """Raised when required connection settings are missing."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="SYS_CONFIGURATION_ERROR")

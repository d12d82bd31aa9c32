"""
Base Service.

Base class for services providing common patterns for business logic.
Services orchestrate repositories, validate input and turn every failure
into an outcome value, so nothing raised inside an operation reaches the
caller.

Usage:
    from notekeeper.services.base import BaseService

    class NoteService(BaseService):
        async def list_notes(self, session: Session) -> NoteOutcome:
            return await self._contain(Operation.LIST, self._list(session))
"""

from collections.abc import Awaitable
from typing import Any

from notekeeper.core.auth import Principal, Session
from notekeeper.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    RemoteQueryError,
    ValidationError,
)
from notekeeper.core.logging import get_logger
from notekeeper.core.supabase import SupabaseClient
from notekeeper.schemas.outcome import ErrorDetail, NoteOutcome, Operation, OutcomeStatus


def error_detail(exc: BaseException) -> ErrorDetail:
    """Describe an exception for an outcome."""
    if isinstance(exc, ApplicationError):
        details = getattr(exc, "details", None) or None
        return ErrorDetail(code=exc.code, message=exc.message, details=details)
    return ErrorDetail(code="SYS_INTERNAL_ERROR", message=str(exc))


class BaseService:
    """
    Base class for all services.

    Provides:
    - Supabase client access
    - Logging context
    - Failure containment for operations
    - Common validation patterns
    """

    def __init__(self, client: SupabaseClient) -> None:
        """
        Initialize the service with a Supabase client.

        Args:
            client: Shared client for the project's REST and auth endpoints
        """
        self._client = client
        self._logger = get_logger(self.__class__.__module__)

    @property
    def client(self) -> SupabaseClient:
        """Get the Supabase client."""
        return self._client

    async def _contain(
        self,
        operation: Operation,
        coro: Awaitable[NoteOutcome],
    ) -> NoteOutcome:
        """
        Await an operation body and convert any failure into an outcome.

        Args:
            operation: Operation being run
            coro: Operation body returning a success outcome

        Returns:
            The body's outcome, or a failure outcome describing the error
        """
        try:
            return await coro
        except ValidationError as e:
            self._logger.info(
                "Validation failed",
                extra={"operation": operation.value, "error": e.message},
            )
            return self._failure(operation, OutcomeStatus.VALIDATION_ERROR, e)
        except AuthenticationError as e:
            self._logger.warning(
                "User not authenticated",
                extra={"operation": operation.value, "error": e.message},
            )
            return self._failure(operation, OutcomeStatus.UNAUTHENTICATED, e)
        except RemoteQueryError as e:
            self._logger.error(
                "Remote operation failed",
                extra={"operation": operation.value, "code": e.code, "error": e.message},
            )
            return self._failure(operation, OutcomeStatus.REMOTE_ERROR, e)
        except Exception as e:
            self._logger.exception(
                "Unexpected error",
                extra={"operation": operation.value, "error": str(e)},
            )
            return self._failure(operation, OutcomeStatus.UNEXPECTED_ERROR, e)

    @staticmethod
    def _failure(
        operation: Operation,
        status: OutcomeStatus,
        exc: BaseException,
    ) -> NoteOutcome:
        return NoteOutcome(operation=operation, status=status, error=error_detail(exc))

    def _require_principal(self, session: Session) -> Principal:
        """
        Return the session's principal.

        Raises:
            AuthenticationError: If the session is not authenticated
        """
        if not session.is_authenticated:
            raise AuthenticationError()
        return session.principal

    def _validate_required(
        self,
        fields: dict[str, Any],
        field_names: list[str],
        message: str = "Required fields missing",
    ) -> None:
        """
        Validate that required fields are present and not empty.

        Args:
            fields: Dictionary of field names to values
            field_names: List of required field names
            message: Error message when any field is missing

        Raises:
            ValidationError: If any required field is missing or blank
        """
        missing = []
        for name in field_names:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)

        if missing:
            raise ValidationError(message, details={"missing_fields": missing})

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )

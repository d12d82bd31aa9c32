"""
Outcome Schemas.

Structured results returned by every note operation in place of UI
callbacks. The presenter layer decides how an outcome is shown.
"""

from enum import Enum

from pydantic import BaseModel, Field

from notekeeper.schemas.note import Note


class Operation(str, Enum):
    """Note store operations."""

    LIST = "list"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class OutcomeStatus(str, Enum):
    """How an operation ended."""

    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"
    UNAUTHENTICATED = "unauthenticated"
    REMOTE_ERROR = "remote_error"
    UNEXPECTED_ERROR = "unexpected_error"


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict | None = None


class NoteOutcome(BaseModel):
    """
    Result of a single note operation.

    notes is the refreshed list; None means the displayed list must be
    left as it is (failed read, failed write, or failed refresh).
    """

    operation: Operation
    status: OutcomeStatus
    notes: list[Note] | None = None
    note: Note | None = None
    error: ErrorDetail | None = None
    refresh_error: ErrorDetail | None = Field(
        default=None,
        description="Set when a write succeeded but the follow-up list refresh failed",
    )

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

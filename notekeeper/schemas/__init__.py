# Pydantic schemas package
from notekeeper.schemas.note import Note, NoteCreate, NoteUpdate
from notekeeper.schemas.outcome import ErrorDetail, NoteOutcome, Operation, OutcomeStatus

__all__ = [
    "ErrorDetail",
    "Note",
    "NoteCreate",
    "NoteOutcome",
    "NoteUpdate",
    "Operation",
    "OutcomeStatus",
]

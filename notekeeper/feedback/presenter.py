"""
Notes Presenter.

Adapter between the note service and a notes screen. Owns the view state
(loading flag, displayed list, input fields, add/edit surfaces, selected
note), wraps each operation in a loading scope and translates the
returned NoteOutcome into state changes, alerts and haptics.

Usage:
    presenter = NotesPresenter(NoteService(client), session, get_feedback())
    await presenter.refresh()
    presenter.state.new_title = "Buy milk"
    await presenter.submit()
"""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from notekeeper.core.auth import Session
from notekeeper.core.config import get_app_config
from notekeeper.core.logging import get_logger, log_with_source, setup_logging
from notekeeper.core.supabase import SupabaseClient
from notekeeper.feedback.signals import FeedbackChannel, HapticType, get_feedback
from notekeeper.schemas.note import Note
from notekeeper.schemas.outcome import ErrorDetail, NoteOutcome, Operation, OutcomeStatus
from notekeeper.services.note import NoteService

logger = get_logger(__name__)

MSG_ENTER_TITLE = "Please enter a title"
MSG_NO_SELECTION = "No note selected"
MSG_NOT_AUTHENTICATED = "User not authenticated"
MSG_UNEXPECTED = "An unexpected error occurred"

REMOTE_FAILURE_MESSAGES = {
    Operation.LIST: "Failed to load notes",
    Operation.UPDATE: "Failed to update note",
    Operation.DELETE: "Failed to delete note",
}


@dataclass
class NotesViewState:
    """Presentation state of the notes screen."""

    loading: bool = False
    notes: list[Note] = field(default_factory=list)
    new_title: str = ""
    new_description: str = ""
    add_visible: bool = False
    edit_visible: bool = False
    selected_note: Note | None = None
    on_loading: Callable[[bool], None] | None = None
    on_notes: Callable[[list[Note]], None] | None = None

    def set_loading(self, loading: bool) -> None:
        self.loading = loading
        if self.on_loading:
            self.on_loading(loading)

    def set_notes(self, notes: list[Note]) -> None:
        # Replaced wholesale; no diffing.
        self.notes = list(notes)
        if self.on_notes:
            self.on_notes(self.notes)


class NotesPresenter:
    """
    Runs note operations on behalf of a screen.

    The session is resolved by the caller and reused for every call.
    Overlapping calls are not serialized.
    """

    def __init__(
        self,
        service: NoteService,
        session: Session,
        feedback: FeedbackChannel,
        state: NotesViewState | None = None,
        alert_title: str = "Error",
    ) -> None:
        self.service = service
        self.session = session
        self.feedback = feedback
        self.state = state or NotesViewState()
        self.alert_title = alert_title

    @asynccontextmanager
    async def _loading(self) -> AsyncIterator[None]:
        self.state.set_loading(True)
        try:
            yield
        finally:
            self.state.set_loading(False)

    async def refresh(self) -> NoteOutcome:
        """Reload the list."""
        async with self._loading():
            outcome = await self.service.list_notes(self.session)
            self._apply_list(outcome)
        return outcome

    async def submit(self) -> NoteOutcome:
        """Create a note from the add form fields."""
        async with self._loading():
            outcome = await self.service.create_note(
                self.session,
                self.state.new_title,
                self.state.new_description,
            )
            if outcome.ok:
                self.state.new_title = ""
                self.state.new_description = ""
                self.state.add_visible = False
            await self._apply_write(outcome)
        return outcome

    async def save_edit(self, title: str, description: str) -> NoteOutcome:
        """Save the edit form for the selected note."""
        async with self._loading():
            outcome = await self.service.update_note(
                self.session,
                self.state.selected_note,
                title,
                description,
            )
            if outcome.ok:
                self.state.edit_visible = False
                self.state.selected_note = None
            await self._apply_write(outcome)
        return outcome

    async def delete(self, note_id: int) -> NoteOutcome:
        """Delete a note. Confirmation is the caller's concern."""
        async with self._loading():
            outcome = await self.service.delete_note(self.session, note_id)
            await self._apply_write(outcome)
        return outcome

    def open_add(self) -> None:
        self.state.add_visible = True

    def open_edit(self, note: Note) -> None:
        self.state.selected_note = note
        self.state.edit_visible = True

    def close_edit(self) -> None:
        self.state.edit_visible = False
        self.state.selected_note = None

    def _apply_list(self, outcome: NoteOutcome) -> None:
        if outcome.ok:
            self.state.set_notes(outcome.notes or [])
        elif outcome.status is OutcomeStatus.UNAUTHENTICATED:
            # Read path stays silent: logged, no alert.
            log_with_source(logger, "presenter", "warning", MSG_NOT_AUTHENTICATED)
        elif outcome.status is OutcomeStatus.REMOTE_ERROR:
            self._alert(REMOTE_FAILURE_MESSAGES[Operation.LIST])
        else:
            self._alert(MSG_UNEXPECTED)

    async def _apply_write(self, outcome: NoteOutcome) -> None:
        if outcome.ok:
            await self.feedback.haptic(HapticType.SUCCESS)
            if outcome.notes is not None:
                self.state.set_notes(outcome.notes)
            elif outcome.refresh_error is not None:
                self._alert(self._refresh_failure_message(outcome.refresh_error))
            return

        message = self._failure_message(outcome)
        self._alert(message)
        if self._wants_error_haptic(outcome):
            await self.feedback.haptic(HapticType.ERROR)

    def _failure_message(self, outcome: NoteOutcome) -> str:
        error = outcome.error or ErrorDetail(code="SYS_INTERNAL_ERROR", message="")

        if outcome.status is OutcomeStatus.VALIDATION_ERROR:
            missing = (error.details or {}).get("missing_fields", [])
            return MSG_NO_SELECTION if "note" in missing else MSG_ENTER_TITLE
        if outcome.status is OutcomeStatus.UNAUTHENTICATED:
            return MSG_NOT_AUTHENTICATED
        if outcome.status is OutcomeStatus.REMOTE_ERROR:
            if outcome.operation is Operation.CREATE:
                return f"Failed to create note: {error.message}"
            return REMOTE_FAILURE_MESSAGES[outcome.operation]
        if outcome.operation is Operation.CREATE:
            return f"{MSG_UNEXPECTED}: {error.message or 'Unknown error'}"
        return MSG_UNEXPECTED

    @staticmethod
    def _wants_error_haptic(outcome: NoteOutcome) -> bool:
        if outcome.status is OutcomeStatus.UNAUTHENTICATED:
            return False
        if outcome.status is OutcomeStatus.VALIDATION_ERROR:
            missing = (outcome.error.details or {}).get("missing_fields", []) if outcome.error else []
            return "note" not in missing
        return True

    @staticmethod
    def _refresh_failure_message(error: ErrorDetail) -> str:
        if error.code == "SYS_INTERNAL_ERROR":
            return MSG_UNEXPECTED
        return REMOTE_FAILURE_MESSAGES[Operation.LIST]

    def _alert(self, message: str) -> None:
        self.feedback.alert(self.alert_title, message)


def create_presenter(client: SupabaseClient, session: Session) -> NotesPresenter:
    """Configure logging and build a presenter wired to the configured feedback channel."""
    setup_logging()
    return NotesPresenter(
        NoteService(client),
        session,
        get_feedback(),
        alert_title=get_app_config().feedback.alert_title,
    )

"""
Note Service.

The note store: list, create, update and delete against the notes table,
scoped to the session's principal. Each operation validates, checks the
session, performs one request, refreshes the list after a successful
write and returns a NoteOutcome. No operation raises.
"""

from notekeeper.core.auth import Session
from notekeeper.core.supabase import SupabaseClient
from notekeeper.repositories.note import NoteRepository
from notekeeper.schemas.note import Note, NoteCreate, NoteUpdate
from notekeeper.schemas.outcome import ErrorDetail, NoteOutcome, Operation, OutcomeStatus
from notekeeper.services.base import BaseService


class NoteService(BaseService):
    """
    Service for note business logic.

    Usage:
        service = NoteService(client)
        outcome = await service.create_note(session, "Buy milk", "")
        if outcome.ok:
            show(outcome.notes)
    """

    def __init__(
        self,
        client: SupabaseClient,
        repo: NoteRepository | None = None,
    ) -> None:
        super().__init__(client)
        self.repo = repo or NoteRepository(client)

    async def list_notes(self, session: Session) -> NoteOutcome:
        """
        Fetch the principal's notes, newest first.

        Args:
            session: Caller's session

        Returns:
            Outcome whose notes hold the full list (empty if none)
        """
        return await self._contain(Operation.LIST, self._list(session))

    async def _list(self, session: Session) -> NoteOutcome:
        principal = self._require_principal(session)
        notes = await self.repo.list_for_user(session.access_token, principal.id)
        self._log_debug("Notes fetched", user_id=principal.id, count=len(notes))
        return NoteOutcome(
            operation=Operation.LIST,
            status=OutcomeStatus.SUCCESS,
            notes=notes,
        )

    async def create_note(
        self,
        session: Session,
        title: str,
        description: str = "",
    ) -> NoteOutcome:
        """
        Create a note owned by the session's principal.

        Title and description are trimmed; a blank title is rejected
        before any request is made.

        Args:
            session: Caller's session
            title: Note title
            description: Note body

        Returns:
            Outcome carrying the created note and the refreshed list
        """
        return await self._contain(
            Operation.CREATE,
            self._create(session, title, description),
        )

    async def _create(self, session: Session, title: str, description: str) -> NoteOutcome:
        data = NoteCreate(title=title or "", description=description or "")
        self._validate_required(data.model_dump(), ["title"], message="Title is required")
        principal = self._require_principal(session)

        self._log_operation("Creating note", table=self.repo.table, user_id=principal.id)
        self._log_debug(
            "Insert payload",
            title=data.title,
            description=data.description,
            user_id=principal.id,
        )

        note = await self.repo.create(session.access_token, principal.id, data)
        self._log_debug("Note created", note_id=note.id)

        return await self._with_refresh(Operation.CREATE, session, note)

    async def update_note(
        self,
        session: Session,
        note: Note | None,
        title: str,
        description: str = "",
    ) -> NoteOutcome:
        """
        Replace the title and description of an existing note.

        Ownership is not re-checked here; a row the backend's policies hide
        from the principal is reported as a remote error.

        Args:
            session: Caller's session
            note: Note being edited (None when nothing is selected)
            title: New title
            description: New description

        Returns:
            Outcome carrying the updated note and the refreshed list
        """
        return await self._contain(
            Operation.UPDATE,
            self._update(session, note, title, description),
        )

    async def _update(
        self,
        session: Session,
        note: Note | None,
        title: str,
        description: str,
    ) -> NoteOutcome:
        self._validate_required({"note": note}, ["note"], message="No note selected")
        data = NoteUpdate(title=title or "", description=description or "")
        self._validate_required(data.model_dump(), ["title"], message="Title is required")
        self._require_principal(session)

        self._log_operation("Updating note", note_id=note.id, fields=["title", "description"])
        updated = await self.repo.update_content(session.access_token, note.id, data)

        return await self._with_refresh(Operation.UPDATE, session, updated)

    async def delete_note(self, session: Session, note_id: int) -> NoteOutcome:
        """
        Hard-delete a note.

        Deleting an id that does not exist, or that the principal cannot
        see, is reported as a remote error rather than raised.

        Args:
            session: Caller's session
            note_id: Note ID to delete

        Returns:
            Outcome carrying the refreshed list
        """
        return await self._contain(Operation.DELETE, self._delete(session, note_id))

    async def _delete(self, session: Session, note_id: int) -> NoteOutcome:
        self._require_principal(session)

        self._log_operation("Deleting note", note_id=note_id)
        removed = await self.repo.delete(session.access_token, note_id)

        return await self._with_refresh(Operation.DELETE, session, removed)

    async def _with_refresh(
        self,
        operation: Operation,
        session: Session,
        note: Note,
    ) -> NoteOutcome:
        """Build a success outcome for a write, refreshing the list."""
        notes, refresh_error = await self._refresh(session)
        return NoteOutcome(
            operation=operation,
            status=OutcomeStatus.SUCCESS,
            note=note,
            notes=notes,
            refresh_error=refresh_error,
        )

    async def _refresh(self, session: Session) -> tuple[list[Note] | None, ErrorDetail | None]:
        """Re-read the list after a write. The write stands if this fails."""
        outcome = await self.list_notes(session)
        if outcome.ok:
            return outcome.notes, None
        return None, outcome.error

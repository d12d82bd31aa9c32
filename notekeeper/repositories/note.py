"""
Note Repository.

Data access for the notes table. Ownership is expressed through the
user_id filter on reads and the user_id column on insert; updates and
deletes filter on id only and rely on the backend's row-level policies.
"""

from notekeeper.core.config import get_app_config
from notekeeper.core.exceptions import NotFoundError
from notekeeper.core.supabase import SupabaseClient
from notekeeper.core.utils import utc_now_iso
from notekeeper.repositories.base import BaseRepository
from notekeeper.schemas.note import Note, NoteCreate, NoteUpdate


class NoteRepository(BaseRepository[Note]):
    """
    Repository for the notes table.

    Inherits the generic table operations from BaseRepository
    and adds note-specific queries.
    """

    model = Note

    def __init__(self, client: SupabaseClient, table: str | None = None) -> None:
        super().__init__(client, table or get_app_config().supabase.notes_table)

    async def list_for_user(self, access_token: str | None, user_id: str) -> list[Note]:
        """
        Get all notes owned by a user, newest first.

        Args:
            access_token: Caller's access token
            user_id: Owning principal

        Returns:
            Notes ordered by created_at descending
        """
        return await self.select(
            access_token,
            {"user_id": user_id},
            order="created_at.desc",
        )

    async def create(
        self,
        access_token: str | None,
        user_id: str,
        data: NoteCreate,
    ) -> Note:
        """Insert a note owned by user_id, stamped with the client clock."""
        return await self.insert(
            access_token,
            {
                "title": data.title,
                "description": data.description,
                "user_id": user_id,
                "created_at": utc_now_iso(),
            },
        )

    async def update_content(
        self,
        access_token: str | None,
        note_id: int,
        data: NoteUpdate,
    ) -> Note:
        """
        Update a note's title and description.

        Raises:
            NotFoundError: If no visible row matched the id
        """
        rows = await self.update_where(
            access_token,
            {"id": note_id},
            {"title": data.title, "description": data.description},
        )
        if not rows:
            raise NotFoundError("Note not found or not accessible")
        return rows[0]

    async def delete(self, access_token: str | None, note_id: int) -> Note:
        """
        Delete a note by id.

        Raises:
            NotFoundError: If no visible row matched the id
        """
        rows = await self.delete_where(access_token, {"id": note_id})
        if not rows:
            raise NotFoundError("Note not found or not accessible")
        return rows[0]

"""
Base Repository.

Base class for table repositories with common PostgREST operations.
Filters are plain equality filters; every call is made with the caller's
access token so the backend's row-level policies decide visibility.
"""

from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel

from notekeeper.core.exceptions import RemoteQueryError
from notekeeper.core.logging import get_logger
from notekeeper.core.supabase import SupabaseClient, error_message

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


def eq(value: Any) -> str:
    """Build a PostgREST equality filter value."""
    return f"eq.{value}"


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common table operations.

    Subclasses should set the model class:

        class NoteRepository(BaseRepository[Note]):
            model = Note
    """

    model: type[ModelType]

    def __init__(self, client: SupabaseClient, table: str) -> None:
        self.client = client
        self.table = table

    def _check(self, response: httpx.Response, operation: str) -> list[dict[str, Any]]:
        """
        Return the JSON rows of a successful response.

        Raises:
            RemoteQueryError: If the backend reported an error
        """
        if response.status_code >= 400:
            message = error_message(response)
            logger.error(
                "Remote query error",
                extra={
                    "operation": operation,
                    "table": self.table,
                    "status_code": response.status_code,
                    "error": message,
                },
            )
            raise RemoteQueryError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return []

        body = response.json()
        return body if isinstance(body, list) else [body]

    def _to_models(self, rows: list[dict[str, Any]]) -> list[ModelType]:
        return [self.model.model_validate(row) for row in rows]

    async def select(
        self,
        access_token: str | None,
        filters: dict[str, Any],
        order: str | None = None,
    ) -> list[ModelType]:
        """Select rows matching all equality filters."""
        params = {"select": "*", **{k: eq(v) for k, v in filters.items()}}
        if order:
            params["order"] = order

        response = await self.client.rest("GET", self.table, access_token, params=params)
        return self._to_models(self._check(response, "select"))

    async def insert(self, access_token: str | None, values: dict[str, Any]) -> ModelType:
        """Insert one row and return it as stored."""
        response = await self.client.rest(
            "POST",
            self.table,
            access_token,
            json=[values],
            headers=RETURN_REPRESENTATION,
        )
        rows = self._check(response, "insert")
        if not rows:
            raise RemoteQueryError("Insert returned no row")
        return self._to_models(rows)[0]

    async def update_where(
        self,
        access_token: str | None,
        filters: dict[str, Any],
        values: dict[str, Any],
    ) -> list[ModelType]:
        """Update rows matching the filters; returns the rows actually changed."""
        response = await self.client.rest(
            "PATCH",
            self.table,
            access_token,
            params={k: eq(v) for k, v in filters.items()},
            json=values,
            headers=RETURN_REPRESENTATION,
        )
        return self._to_models(self._check(response, "update"))

    async def delete_where(
        self,
        access_token: str | None,
        filters: dict[str, Any],
    ) -> list[ModelType]:
        """Delete rows matching the filters; returns the rows actually removed."""
        response = await self.client.rest(
            "DELETE",
            self.table,
            access_token,
            params={k: eq(v) for k, v in filters.items()},
            headers=RETURN_REPRESENTATION,
        )
        return self._to_models(self._check(response, "delete"))

"""
Note Schemas.

Pydantic models for note rows and the payloads written to the notes table.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Note(BaseModel):
    """A note row as returned by the backend."""

    id: int = Field(description="Server-assigned identifier")
    title: str = Field(description="Note title")
    description: str | None = Field(default="", description="Note body, may be empty")
    user_id: str = Field(description="Owning principal")
    created_at: datetime = Field(description="Creation timestamp (client clock)")

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, value: Any) -> Any:
        return "" if value is None else value

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"


class NoteCreate(BaseModel):
    """Schema for inserting a note. Whitespace is trimmed from both fields."""

    title: str = Field(
        ...,
        description="Note title",
        examples=["Buy milk"],
    )
    description: str = Field(
        default="",
        description="Note body",
        examples=["Two litres, semi-skimmed."],
    )

    model_config = ConfigDict(str_strip_whitespace=True)


class NoteUpdate(BaseModel):
    """Schema for updating a note. Only title and description are writable."""

    title: str = Field(..., description="Note title")
    description: str = Field(default="", description="Note body")

    model_config = ConfigDict(str_strip_whitespace=True)

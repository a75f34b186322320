"""Note request/response schemas.

JSON uses camelCase (isFavorite, ownerId, createdAt); Python attributes
stay snake_case.
"""

import sqlite3

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class NoteSchema(BaseModel):
    """Base for note schemas: camelCase aliases, snake_case accepted too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NoteCreate(NoteSchema):
    """Create request. ownerId is never accepted from the client."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    is_favorite: bool = False

    @field_validator("is_favorite", mode="before")
    @classmethod
    def null_favorite_is_false(cls, v):
        return False if v is None else v


class NoteUpdate(NoteSchema):
    """Partial update. Unknown keys (ownerId, id, ...) are ignored."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    is_favorite: bool | None = None


class NoteResponse(NoteSchema):
    """Note as returned to clients."""

    id: str
    owner_id: str
    title: str
    content: str
    is_favorite: bool
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "NoteResponse":
        return cls(
            id=row["id"],
            owner_id=row["owner_id"],
            title=row["title"],
            content=row["content"],
            is_favorite=bool(row["is_favorite"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)

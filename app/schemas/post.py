"""
Blog post schemas.

Request bodies are validated here, at the transport boundary, so the
service only ever receives well-formed input. Unknown fields are rejected.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from app.configs import MAX_TITLE_LENGTH


class PostCreate(BaseModel):
    """Post creation model (request body)."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(
        ...,
        min_length=1,
        max_length=MAX_TITLE_LENGTH,
        description="Post title",
        examples=["Test Post"],
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Post body",
        examples=["This is a test post"],
    )


class PostUpdate(BaseModel):
    """Partial post update; omitted fields are left untouched."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=MAX_TITLE_LENGTH,
        description="New title",
        examples=["Updated title"],
    )
    description: str | None = Field(
        default=None,
        min_length=1,
        description="New body",
    )


class PostResponse(BaseModel):
    """Post as returned to clients and stored in the cache."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "Test Post",
                "description": "This is a test post",
                "createdAt": "2026-10-19T08:30:00.123456+00:00",
                "updatedAt": "2026-10-19T08:30:00.123456+00:00",
            },
        },
    )

    id: UUID = Field(description="Post ID")
    title: str = Field(description="Post title")
    description: str = Field(description="Post body")
    created_at: datetime = Field(alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(alias="updatedAt", description="Last update timestamp")


PostListAdapter = TypeAdapter(list[PostResponse])

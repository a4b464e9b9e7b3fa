"""Blog post database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.configs import MAX_TITLE_LENGTH
from app.utils.helpers import utc_now


class PostDB(SQLModel, table=True):
    """
    Blog post database model.

    This model represents the posts table. ``created_at`` is indexed
    because listings are always ordered newest first.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Post ID",
    )
    title: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False),
        description="Post title",
    )
    description: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Post body",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "Hello",
                "description": "First post",
            },
        },
    )

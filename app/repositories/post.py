"""Post repository for database operations."""

from logging import getLogger
from uuid import UUID

from sqlalchemy import desc, select

from app.configs import file_logger
from app.errors.database import RecordNotFoundError
from app.models.post import PostDB
from app.repositories.base import BaseRepository
from app.schemas.post import PostCreate, PostUpdate
from app.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))


class PostRepository(BaseRepository[PostDB, PostCreate, PostUpdate]):
    """
    Repository for blog post persistence.

    Translates the post operations into SQL. It knows nothing about
    caching.
    """

    model = PostDB

    async def create(self, schema: PostCreate) -> PostDB:  # type: ignore[override]
        """
        Insert a post with a fresh id and identical created/updated stamps.

        Args:
            schema: Validated creation payload

        Returns:
            PostDB: The committed row
        """
        now = utc_now()
        post = await super().create(schema, created_at=now, updated_at=now)
        logger.info("Created post %s", post.id)
        return post

    async def get_all(self, skip: int = 0, limit: int = 10) -> list[PostDB]:
        """
        Fetch one page of posts, newest first.

        Args:
            skip: Rows to skip, ``(page - 1) * step``
            limit: Maximum rows to return

        Returns:
            list[PostDB]: Posts ordered by ``created_at`` descending
        """
        statement = select(PostDB).order_by(desc(PostDB.created_at)).offset(skip).limit(limit)
        result = await self._execute(statement, "list posts")
        return list(result.scalars().all())

    async def update(self, record_id: UUID, schema: PostUpdate) -> PostDB:  # type: ignore[override]
        """
        Apply a partial update and refresh ``updated_at``.

        Args:
            record_id: Post UUID
            schema: Fields to replace; unset fields are left untouched

        Returns:
            PostDB: The updated row

        Raises:
            RecordNotFoundError: If the post does not exist
        """
        post = await super().update(record_id, schema, updated_at=utc_now())
        if post is None:
            raise RecordNotFoundError(detail=f"Post with ID {record_id} not found")
        return post

    async def delete(self, record_id: UUID) -> bool:
        deleted = await super().delete(record_id)
        if deleted:
            logger.info("Deleted post %s", record_id)
        return deleted

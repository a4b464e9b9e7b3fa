"""
Blog post access service.

Composes the post repository and the cache manager into cache-aside reads
with invalidation on writes. The cache is an optimisation only: any cache
failure is logged and the request carries on against the database.
"""

from collections.abc import Awaitable, Callable
from logging import getLogger
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from app.configs import DEFAULT_PAGE, DEFAULT_STEP, file_logger
from app.errors.cache import CacheExceptionError
from app.errors.database import PostNotFoundError
from app.managers.cache_manager import CacheManager
from app.repositories.post import PostRepository
from app.schemas.post import PostCreate, PostListAdapter, PostResponse, PostUpdate
from app.utils.cache_keys import POST_TAG, POSTS_LIST_TAG

logger = file_logger(getLogger(__name__))

PostAdapter = TypeAdapter(PostResponse)


class BlogService:
    """Service for reading and writing blog posts through the cache."""

    def __init__(
        self,
        repository: PostRepository,
        cache: CacheManager,
        ttl: int | None = None,
    ) -> None:
        """
        Initialize the blog service.

        Args:
            repository: Post repository (source of truth)
            cache: Cache manager used for the fast path
            ttl: Entry lifetime in seconds; the cache default when None
        """
        self.repository = repository
        self.cache = cache
        self.ttl = ttl

    async def create(self, data: PostCreate) -> PostResponse:
        """
        Create a post and wipe the cache namespace.

        Every cached listing page may now be shifted by the new post, so the
        whole namespace is cleared rather than tracking individual pages.

        Args:
            data: Validated creation payload

        Returns:
            PostResponse: The created post
        """
        post = PostResponse.model_validate(await self.repository.create(data))
        await self._clear()
        return post

    async def list_posts(
        self,
        page: int = DEFAULT_PAGE,
        step: int = DEFAULT_STEP,
    ) -> list[PostResponse]:
        """
        Return one page of posts, newest first.

        Args:
            page: 1-based page number
            step: Page size

        Returns:
            list[PostResponse]: Up to ``step`` posts
        """
        key = self.cache.build_key(POSTS_LIST_TAG, page, step)

        async def fetch() -> list[PostResponse]:
            posts = await self.repository.get_all(skip=(page - 1) * step, limit=step)
            return [PostResponse.model_validate(post) for post in posts]

        return await self._cached_or_fetch(key, fetch, PostListAdapter)

    async def get(self, post_id: UUID) -> PostResponse:
        """
        Return a single post.

        Args:
            post_id: Post UUID

        Returns:
            PostResponse: The post

        Raises:
            PostNotFoundError: If no post has this id
        """
        key = self.cache.build_key(POST_TAG, post_id)

        async def fetch() -> PostResponse:
            post = await self.repository.get_by_id(post_id)
            if post is None:
                raise PostNotFoundError(post_id)
            return PostResponse.model_validate(post)

        return await self._cached_or_fetch(key, fetch, PostAdapter)

    async def update(self, post_id: UUID, data: PostUpdate) -> PostResponse:
        """
        Apply a partial update and drop the post's cache entry.

        Listing pages that include the post are left to expire on their own.

        Args:
            post_id: Post UUID
            data: Fields to replace

        Returns:
            PostResponse: The updated post

        Raises:
            PostNotFoundError: If no post has this id
        """
        await self.get(post_id)
        post = PostResponse.model_validate(await self.repository.update(post_id, data))
        await self._invalidate(self.cache.build_key(POST_TAG, post_id))
        return post

    async def remove(self, post_id: UUID) -> None:
        """
        Delete a post and drop its cache entry.

        Raises:
            PostNotFoundError: If no post has this id
        """
        await self.get(post_id)
        if not await self.repository.delete(post_id):
            raise PostNotFoundError(post_id)
        await self._invalidate(self.cache.build_key(POST_TAG, post_id))

    async def _cached_or_fetch[T](
        self,
        key: str,
        fetch: Callable[[], Awaitable[T]],
        adapter: TypeAdapter[T],
    ) -> T:
        cached = await self._cache_get(key)
        if cached:
            try:
                return adapter.validate_python(cached)
            except ValidationError:
                logger.warning("Discarding malformed cache entry for key %s", key)

        value = await fetch()
        await self._cache_set(key, adapter.dump_python(value, mode="json", by_alias=True))
        return value

    async def _cache_get(self, key: str) -> object | None:
        try:
            return await self.cache.get(key)
        except CacheExceptionError as e:
            logger.warning("Cache read failed for key %s, falling back to storage: %s", key, e)
            return None

    async def _cache_set(self, key: str, value: object) -> None:
        try:
            await self.cache.set(key, value, ttl=self.ttl)
        except CacheExceptionError as e:
            logger.warning("Cache write failed for key %s: %s", key, e)

    async def _invalidate(self, key: str) -> None:
        try:
            await self.cache.delete(key)
        except CacheExceptionError as e:
            logger.warning("Cache invalidation failed for key %s: %s", key, e)

    async def _clear(self) -> None:
        try:
            await self.cache.clear()
        except CacheExceptionError as e:
            logger.warning("Cache clear failed: %s", e)

"""Tests for app/services/blog.py."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.errors import CacheKeyError, PostNotFoundError
from app.managers.cache_manager import CacheManager
from app.models import PostDB
from app.repositories import PostRepository
from app.schemas import PostCreate, PostResponse, PostUpdate
from app.services import BlogService
from app.utils.cache_keys import build_key


@pytest.fixture
def store() -> dict[str, Any]:
    """Backing dict for the fake cache."""
    return {}


@pytest.fixture
def repository() -> AsyncMock:
    return AsyncMock(spec=PostRepository)


@pytest.fixture
def cache(store: dict[str, Any]) -> AsyncMock:
    """AsyncMock cache backed by a plain dict so hits and misses are real."""
    mock = AsyncMock(spec=CacheManager)
    mock.build_key = build_key

    async def get(key: str) -> Any:
        return store.get(key)

    async def set_(key: str, value: object, ttl: int | None = None) -> bool:
        store[key] = value
        return True

    async def delete(*keys: str) -> int:
        return sum(store.pop(key, None) is not None for key in keys)

    async def clear() -> int:
        count = len(store)
        store.clear()
        return count

    mock.get.side_effect = get
    mock.set.side_effect = set_
    mock.delete.side_effect = delete
    mock.clear.side_effect = clear
    return mock


@pytest.fixture
def service(repository: AsyncMock, cache: AsyncMock) -> BlogService:
    return BlogService(repository, cache)


class TestCreate:
    async def test_returns_created_post(
        self,
        service: BlogService,
        repository: AsyncMock,
        make_post,
    ) -> None:
        row = make_post(title="Hello", description="World")
        repository.create.return_value = row

        post = await service.create(PostCreate(title="Hello", description="World"))

        assert isinstance(post, PostResponse)
        assert post.id == row.id
        assert post.title == "Hello"
        assert post.created_at == post.updated_at

    async def test_clears_whole_cache(
        self,
        service: BlogService,
        repository: AsyncMock,
        cache: AsyncMock,
        store: dict[str, Any],
        make_post,
    ) -> None:
        store["posts:1:10"] = [{"id": "x"}]
        store["post:abc"] = {"id": "abc"}
        repository.create.return_value = make_post()

        await service.create(PostCreate(title="t", description="d"))

        cache.clear.assert_awaited_once()
        assert store == {}

    async def test_clear_failure_is_not_fatal(
        self,
        service: BlogService,
        repository: AsyncMock,
        cache: AsyncMock,
        make_post,
    ) -> None:
        repository.create.return_value = make_post(title="kept")
        cache.clear.side_effect = CacheKeyError("clear")

        post = await service.create(PostCreate(title="kept", description="d"))

        assert post.title == "kept"

    async def test_storage_failure_propagates(
        self,
        service: BlogService,
        repository: AsyncMock,
        cache: AsyncMock,
    ) -> None:
        from app.errors import DatabaseError

        repository.create.side_effect = DatabaseError("boom")

        with pytest.raises(DatabaseError):
            await service.create(PostCreate(title="t", description="d"))
        cache.clear.assert_not_awaited()


class TestListPosts:
    async def test_second_call_is_served_from_cache(
        self,
        service: BlogService,
        repository: AsyncMock,
        cache: AsyncMock,
        make_post,
    ) -> None:
        repository.get_all.return_value = [make_post(title="a"), make_post(title="b")]

        first = await service.list_posts(page=1, step=10)
        second = await service.list_posts(page=1, step=10)

        assert first == second
        assert cache.get.await_count == 2
        repository.get_all.assert_awaited_once_with(skip=0, limit=10)

    async def test_pagination_offsets(
        self,
        service: BlogService,
        repository: AsyncMock,
        cache: AsyncMock,
    ) -> None:
        repository.get_all.return_value = []

        await service.list_posts(page=3, step=5)

        repository.get_all.assert_awaited_once_with(skip=10, limit=5)
        cache.get.assert_awaited_once_with("posts:3:5")

    async def test_cached_listing_uses_wire_shape(
        self,
        service: BlogService,
        repository: AsyncMock,
        store: dict[str, Any],
        make_post,
    ) -> None:
        row = make_post()
        repository.get_all.return_value = [row]

        await service.list_posts()

        cached = store["posts:1:10"]
        assert cached[0]["id"] == str(row.id)
        assert "createdAt" in cached[0]
        assert "updatedAt" in cached[0]

    async def test_empty_cached_list_counts_as_miss(
        self,
        service: BlogService,
        repository: AsyncMock,
        store: dict[str, Any],
    ) -> None:
        store["posts:1:10"] = []
        repository.get_all.return_value = []

        await service.list_posts()
        await service.list_posts()

        assert repository.get_all.await_count == 2

    async def test_cache_read_failure_falls_back_to_storage(
        self,
        service: BlogService,
        repository: AsyncMock,
        cache: AsyncMock,
        make_post,
    ) -> None:
        cache.get.side_effect = CacheKeyError("get")
        repository.get_all.return_value = [make_post(title="fresh")]

        posts = await service.list_posts()

        assert [post.title for post in posts] == ["fresh"]

    async def test_cache_write_failure_is_not_fatal(
        self,
        service: BlogService,
        repository: AsyncMock,
        cache: AsyncMock,
        make_post,
    ) -> None:
        cache.set.side_effect = CacheKeyError("set")
        repository.get_all.return_value = [make_post()]

        posts = await service.list_posts()

        assert len(posts) == 1

    async def test_malformed_cache_entry_is_refetched(
        self,
        service: BlogService,
        repository: AsyncMock,
        store: dict[str, Any],
        make_post,
    ) -> None:
        store["posts:1:10"] = [{"unexpected": True}]
        repository.get_all.return_value = [make_post(title="real")]

        posts = await service.list_posts()

        assert posts[0].title == "real"
        repository.get_all.assert_awaited_once()


class TestGet:
    async def test_miss_then_hit(
        self,
        service: BlogService,
        repository: AsyncMock,
        cache: AsyncMock,
        make_post,
    ) -> None:
        row = make_post()
        repository.get_by_id.return_value = row

        first = await service.get(row.id)
        second = await service.get(row.id)

        assert first == second
        assert first.id == row.id
        repository.get_by_id.assert_awaited_once_with(row.id)
        cache.get.assert_awaited_with(f"post:{row.id}")

    async def test_missing_post_raises_not_found(
        self,
        service: BlogService,
        repository: AsyncMock,
        store: dict[str, Any],
    ) -> None:
        post_id = uuid4()
        repository.get_by_id.return_value = None

        with pytest.raises(PostNotFoundError) as exc_info:
            await service.get(post_id)

        assert exc_info.value.status_code == 404
        assert str(post_id) in exc_info.value.detail
        assert store == {}


class TestUpdate:
    async def test_updates_and_drops_single_post_key(
        self,
        service: BlogService,
        repository: AsyncMock,
        cache: AsyncMock,
        store: dict[str, Any],
        make_post,
    ) -> None:
        row = make_post(title="old", description="body")
        updated = make_post(title="X", description="body")
        updated.id = row.id
        repository.get_by_id.return_value = row
        repository.update.return_value = updated
        store["posts:1:10"] = [{"stale": True}]

        post = await service.update(row.id, PostUpdate(title="X"))

        assert post.title == "X"
        assert post.description == "body"
        repository.update.assert_awaited_once_with(row.id, PostUpdate(title="X"))
        cache.delete.assert_awaited_once_with(f"post:{row.id}")
        cache.clear.assert_not_awaited()
        assert f"post:{row.id}" not in store
        assert "posts:1:10" in store

    async def test_next_get_reflects_update(
        self,
        service: BlogService,
        repository: AsyncMock,
        make_post,
    ) -> None:
        row = make_post(title="old")
        updated = make_post(title="new")
        updated.id = row.id
        repository.get_by_id.side_effect = [row, updated]
        repository.update.return_value = updated

        await service.update(row.id, PostUpdate(title="new"))
        fetched = await service.get(row.id)

        assert fetched.title == "new"

    async def test_missing_post_raises_before_writing(
        self,
        service: BlogService,
        repository: AsyncMock,
    ) -> None:
        repository.get_by_id.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.update(uuid4(), PostUpdate(title="X"))
        repository.update.assert_not_awaited()

    async def test_invalidation_failure_is_not_fatal(
        self,
        service: BlogService,
        repository: AsyncMock,
        cache: AsyncMock,
        make_post,
    ) -> None:
        row = make_post()
        repository.get_by_id.return_value = row
        repository.update.return_value = row
        cache.delete.side_effect = CacheKeyError("delete")

        post = await service.update(row.id, PostUpdate(description="new"))

        assert post.id == row.id


class TestRemove:
    async def test_removes_and_drops_single_post_key(
        self,
        service: BlogService,
        repository: AsyncMock,
        cache: AsyncMock,
        make_post,
    ) -> None:
        row = make_post()
        repository.get_by_id.return_value = row
        repository.delete.return_value = True

        result = await service.remove(row.id)

        assert result is None
        repository.delete.assert_awaited_once_with(row.id)
        cache.delete.assert_awaited_once_with(f"post:{row.id}")
        cache.clear.assert_not_awaited()

    async def test_get_after_remove_raises_not_found(
        self,
        service: BlogService,
        repository: AsyncMock,
        make_post,
    ) -> None:
        row = make_post()
        repository.get_by_id.side_effect = [row, None]
        repository.delete.return_value = True

        await service.remove(row.id)

        with pytest.raises(PostNotFoundError):
            await service.get(row.id)

    async def test_missing_post_raises_not_found(
        self,
        service: BlogService,
        repository: AsyncMock,
    ) -> None:
        repository.get_by_id.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.remove(uuid4())
        repository.delete.assert_not_awaited()

    async def test_concurrent_delete_raises_not_found(
        self,
        service: BlogService,
        repository: AsyncMock,
        make_post,
    ) -> None:
        repository.get_by_id.return_value = make_post()
        repository.delete.return_value = False

        with pytest.raises(PostNotFoundError):
            await service.remove(uuid4())


@pytest.mark.parametrize(
    ("title", "description"),
    [("a", "b"), ("Test Post", "This is a test post"), ("x" * 255, "long " * 200)],
)
async def test_create_then_get_round_trip(
    service: BlogService,
    repository: AsyncMock,
    title: str,
    description: str,
) -> None:
    rows: dict = {}

    async def create(data: PostCreate) -> PostDB:
        row = PostDB(title=data.title, description=data.description)
        rows[row.id] = row
        return row

    async def get_by_id(post_id):
        return rows.get(post_id)

    repository.create.side_effect = create
    repository.get_by_id.side_effect = get_by_id

    created = await service.create(PostCreate(title=title, description=description))
    fetched = await service.get(created.id)

    assert fetched == created

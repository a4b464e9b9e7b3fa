"""Tests for app/repositories/post.py against an in-memory SQLite database."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlmodel.ext.asyncio.session import AsyncSession

from app.errors import DatabaseConnectionError, DatabaseError, RecordNotFoundError
from app.repositories import PostRepository
from app.schemas import PostCreate, PostUpdate


@pytest.fixture
def repo(session: AsyncSession) -> PostRepository:
    return PostRepository(session)


async def _seed(session: AsyncSession, make_post, count: int) -> list:
    """Insert posts one minute apart; the last one is the newest."""
    base = datetime(2026, 1, 1, tzinfo=UTC)
    posts = [
        make_post(title=f"post {i}", created_at=base + timedelta(minutes=i)) for i in range(count)
    ]
    session.add_all(posts)
    await session.commit()
    return posts


async def test_create_assigns_id_and_equal_timestamps(repo: PostRepository) -> None:
    post = await repo.create(PostCreate(title="Hello", description="First post"))

    assert post.id is not None
    assert post.title == "Hello"
    assert post.description == "First post"
    assert post.created_at == post.updated_at


async def test_create_commits(repo: PostRepository, session_maker) -> None:
    post = await repo.create(PostCreate(title="durable", description="d"))

    async with session_maker() as other:
        found = await PostRepository(other).get_by_id(post.id)

    assert found is not None
    assert found.title == "durable"


async def test_get_by_id_missing_returns_none(repo: PostRepository) -> None:
    assert await repo.get_by_id(uuid4()) is None


async def test_get_all_orders_newest_first(repo: PostRepository, session, make_post) -> None:
    await _seed(session, make_post, 3)

    posts = await repo.get_all(skip=0, limit=10)

    assert [post.title for post in posts] == ["post 2", "post 1", "post 0"]


async def test_get_all_paginates(repo: PostRepository, session, make_post) -> None:
    await _seed(session, make_post, 7)

    first_page = await repo.get_all(skip=0, limit=5)
    second_page = await repo.get_all(skip=5, limit=5)

    assert len(first_page) == 5
    assert [post.title for post in second_page] == ["post 1", "post 0"]


async def test_get_all_past_the_end_is_empty(repo: PostRepository, session, make_post) -> None:
    await _seed(session, make_post, 2)

    assert await repo.get_all(skip=10, limit=10) == []


async def test_update_changes_only_supplied_fields(repo: PostRepository) -> None:
    post = await repo.create(PostCreate(title="old", description="body"))
    created_at = post.created_at

    updated = await repo.update(post.id, PostUpdate(title="new"))

    assert updated.title == "new"
    assert updated.description == "body"
    assert updated.created_at == created_at
    assert updated.updated_at >= created_at


async def test_update_missing_raises(repo: PostRepository) -> None:
    with pytest.raises(RecordNotFoundError):
        await repo.update(uuid4(), PostUpdate(title="X"))


async def test_delete(repo: PostRepository) -> None:
    post = await repo.create(PostCreate(title="gone", description="soon"))

    assert await repo.delete(post.id) is True
    assert await repo.get_by_id(post.id) is None
    assert await repo.delete(post.id) is False


async def test_count(repo: PostRepository, session, make_post) -> None:
    await _seed(session, make_post, 4)

    assert await repo.count() == 4


async def test_operational_error_becomes_connection_error() -> None:
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

    with pytest.raises(DatabaseConnectionError):
        await PostRepository(session).get_by_id(uuid4())


async def test_other_sqlalchemy_error_becomes_database_error() -> None:
    session = AsyncMock()
    session.execute.side_effect = ProgrammingError("SELECT", {}, Exception("bad sql"))

    with pytest.raises(DatabaseError) as exc_info:
        await PostRepository(session).get_all()

    assert not isinstance(exc_info.value, DatabaseConnectionError)
    assert exc_info.value.status_code == 500


async def test_failed_commit_rolls_back() -> None:
    session = AsyncMock()
    session.add = lambda record: None
    session.commit.side_effect = OperationalError("INSERT", {}, Exception("down"))

    with pytest.raises(DatabaseConnectionError):
        await PostRepository(session).create(PostCreate(title="t", description="d"))

    session.rollback.assert_awaited_once()

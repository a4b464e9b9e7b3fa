# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before the app is imported anywhere: settings are read once.
os.environ["ENVIRONMENT"] = "test"
os.environ["REDIS_ENABLED"] = "false"
os.environ["LOG_TO_FILE"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DATABASE_SYNCHRONIZE"] = "false"

from collections.abc import AsyncGenerator, Callable  # noqa: E402
from datetime import UTC, datetime  # noqa: E402

from httpx import ASGITransport, AsyncClient  # noqa: E402
from pytest import fixture  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from app.clients import MemoryClient  # noqa: E402
from app.db import get_session  # noqa: E402
from app.main import app  # noqa: E402
from app.managers.cache_manager import CacheManager  # noqa: E402
from app.managers.cache_manager import cache_manager as global_cache_manager  # noqa: E402
from app.models import PostDB  # noqa: E402

PostFactory = Callable[..., PostDB]


@fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory SQLite database with the posts table."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@fixture
async def session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    async with session_maker() as db_session:
        yield db_session


@fixture
async def cache() -> AsyncGenerator[CacheManager]:
    """Cache manager running on the in-memory client."""
    manager = CacheManager(memory_client=MemoryClient())
    await manager.initialize()
    yield manager
    await manager.shutdown()


@fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
    cache: CacheManager,
) -> AsyncGenerator[AsyncClient]:
    """
    HTTP client against the app with SQLite and the in-memory cache.

    ASGITransport does not run the lifespan, so the fixture wires the
    collaborators the lifespan would normally set up.
    """

    async def override_get_session() -> AsyncGenerator[AsyncSession]:
        async with session_maker() as db_session:
            yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.state.cache_manager = cache
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
    app.state.cache_manager = global_cache_manager


@fixture
def make_post() -> PostFactory:
    """Build unsaved PostDB rows with sensible defaults."""

    def factory(
        title: str = "Test Post",
        description: str = "This is a test post",
        created_at: datetime | None = None,
    ) -> PostDB:
        stamp = created_at or datetime.now(tz=UTC)
        return PostDB(
            title=title,
            description=description,
            created_at=stamp,
            updated_at=stamp,
        )

    return factory

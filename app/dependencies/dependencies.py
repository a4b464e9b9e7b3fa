# app/dependencies/dependencies.py

"""Application dependencies wiring the blog service together."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import DEFAULT_PAGE, DEFAULT_STEP
from app.db import get_session
from app.managers.cache_manager import CacheManager
from app.repositories import PostRepository
from app.services import BlogService


def get_post_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PostRepository:
    """
    Resolve the `PostRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    PostRepository
        Repository bound to the request's session.
    """
    return PostRepository(session)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]


def get_cache_manager(request: Request) -> CacheManager:
    """Dependency to get the global cache manager instance."""
    return request.app.state.cache_manager


CacheDep = Annotated[CacheManager, Depends(get_cache_manager)]


def get_blog_service(repository: PostRepoDep, cache: CacheDep) -> BlogService:
    """
    Build the request-scoped `BlogService`.

    Parameters
    ----------
    repository : PostRepository
        Post repository for this request.
    cache : CacheManager
        Process-wide cache manager.

    Returns
    -------
    BlogService
        Service with both collaborators injected.
    """
    return BlogService(repository, cache)


BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]


@dataclass(frozen=True)
class PaginationQuery:
    """
    Query container for post listing.

    Parameters
    ----------
    page : int
        1-based page number.
    step : int
        Page size.
    """

    page: int = DEFAULT_PAGE
    step: int = DEFAULT_STEP


def get_pagination_query(
    page: Annotated[int, Query(ge=1, description="Page number, starting at 1")] = DEFAULT_PAGE,
    step: Annotated[int, Query(ge=1, description="Number of posts per page")] = DEFAULT_STEP,
) -> PaginationQuery:
    """
    Build pagination parameters for post listing.

    Parameters
    ----------
    page : int
        1-based page number.
    step : int
        Page size.

    Returns
    -------
    PaginationQuery
        Validated pagination values.
    """
    return PaginationQuery(page=page, step=step)


PaginationDep = Annotated[PaginationQuery, Depends(get_pagination_query)]

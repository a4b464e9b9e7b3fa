# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    BlogServiceDep,
    CacheDep,
    PaginationDep,
    PaginationQuery,
    PostRepoDep,
    get_blog_service,
    get_cache_manager,
    get_pagination_query,
    get_post_repository,
)

__all__ = [
    "BlogServiceDep",
    "CacheDep",
    "PaginationDep",
    "PaginationQuery",
    "PostRepoDep",
    "get_blog_service",
    "get_cache_manager",
    "get_pagination_query",
    "get_post_repository",
]

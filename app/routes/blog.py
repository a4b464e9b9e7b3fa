# app/routes/blog.py

"""
Blog Routes.

Provides CRUD endpoints and paginated listing for blog posts.

Summary
-------
Endpoints include:
  - Create post
  - List posts (paginated, newest first)
  - Get post by id
  - Update post
  - Delete post

Dependencies
------------
  - `BlogServiceDep`: Request-scoped service holding the post repository and
    the process-wide cache manager.
  - `PaginationDep`: Validated `page` / `step` query parameters.

Validation
----------
Bodies, query parameters and path ids are validated before the service is
called; malformed input is answered with `400` and field-level errors.
"""

from logging import getLogger
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_200_OK, HTTP_201_CREATED

from app.configs import file_logger, settings
from app.dependencies import BlogServiceDep, PaginationDep
from app.schemas import PostCreate, PostResponse, PostUpdate

router = APIRouter(prefix=f"{settings.api_root}/blog", tags=["📝 Blog"])

logger = file_logger(getLogger(__name__))

POST_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "title": "Test Post",
    "description": "This is a test post",
    "createdAt": "2026-10-19T08:30:00.123456+00:00",
    "updatedAt": "2026-10-19T08:30:00.123456+00:00",
}

VALIDATION_RESPONSE = {
    "description": "Validation failed",
    "content": {
        "application/json": {
            "example": {
                "detail": "Validation failed",
                "errors": [
                    {
                        "field": "title",
                        "message": "String should have at least 1 character",
                        "type": "string_too_short",
                    },
                ],
            },
        },
    },
}

NOT_FOUND_RESPONSE = {
    "description": "Not found",
    "content": {
        "application/json": {"example": {"detail": "Post with ID <uuid> not found"}},
    },
}


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new blog post",
    description="Create a post and clear every cached entry.",
    responses={
        201: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: VALIDATION_RESPONSE,
    },
    operation_id="blog_create",
)
async def create_post(
    post: Annotated[
        PostCreate,
        Body(
            examples=[{"title": "Test Post", "description": "This is a test post"}],
        ),
    ],
    service: BlogServiceDep,
) -> PostResponse:
    """
    Create a new blog post.

    Parameters
    ----------
    post : PostCreate
        Title and description of the new post.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    PostResponse
        Created post with its generated id and timestamps.
    """
    created = await service.create(post)
    logger.info("Post %s created", created.id)
    return created


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[PostResponse],
    summary="List blog posts",
    description="Return one page of posts ordered newest first.",
    responses={
        200: {"content": {"application/json": {"example": [POST_EXAMPLE]}}},
        400: VALIDATION_RESPONSE,
    },
    operation_id="blog_list",
)
async def list_posts(
    pagination: PaginationDep,
    service: BlogServiceDep,
) -> list[PostResponse]:
    """
    List posts with page/step pagination.

    Parameters
    ----------
    pagination : PaginationQuery
        `page` (1-based) and `step` (page size).
    service : BlogService
        Blog service dependency.

    Returns
    -------
    list[PostResponse]
        Up to `step` posts.
    """
    return await service.list_posts(page=pagination.page, step=pagination.step)


@router.get(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Get a blog post by ID",
    description="Retrieve a single post by its UUID.",
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: VALIDATION_RESPONSE,
        404: NOT_FOUND_RESPONSE,
    },
    operation_id="blog_get",
)
async def get_post(post_id: UUID, service: BlogServiceDep) -> PostResponse:
    """
    Get a post by ID.

    Parameters
    ----------
    post_id : UUID
        Post identifier.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    PostResponse
        The requested post.

    Raises
    ------
    PostNotFoundError
        If no post has this id.
    """
    return await service.get(post_id)


@router.put(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Update a blog post",
    description="Replace the supplied fields of a post and refresh its update timestamp.",
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: VALIDATION_RESPONSE,
        404: NOT_FOUND_RESPONSE,
    },
    operation_id="blog_update",
)
async def update_post(
    post_id: UUID,
    post: Annotated[PostUpdate, Body(examples=[{"title": "Updated title"}])],
    service: BlogServiceDep,
) -> PostResponse:
    """
    Partially update a post.

    Parameters
    ----------
    post_id : UUID
        Post identifier.
    post : PostUpdate
        Fields to replace; omitted fields stay as they are.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    PostResponse
        Updated post.
    """
    updated = await service.update(post_id, post)
    logger.info("Post %s updated", post_id)
    return updated


@router.delete(
    "/{post_id}",
    status_code=HTTP_200_OK,
    response_class=Response,
    summary="Delete a blog post",
    description="Permanently delete a post. Responds with an empty body.",
    responses={
        200: {"description": "Post deleted"},
        400: VALIDATION_RESPONSE,
        404: NOT_FOUND_RESPONSE,
    },
    operation_id="blog_delete",
)
async def delete_post(post_id: UUID, service: BlogServiceDep) -> Response:
    """
    Delete a post.

    Parameters
    ----------
    post_id : UUID
        Post identifier.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    Response
        Empty `200` response.
    """
    await service.remove(post_id)
    logger.info("Post %s deleted", post_id)
    return Response(status_code=HTTP_200_OK)

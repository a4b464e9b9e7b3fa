"""
Cache key builders for the application.

Keys are a tag followed by an ordered parameter list, joined by a fixed
delimiter, so identical logical requests always map to the same key. The
service and any future callers share these builders to coordinate cache
invalidation.
"""

from uuid import UUID

KEY_DELIMITER = ":"

POSTS_LIST_TAG = "posts"
POST_TAG = "post"


def build_key(tag: str, *params: str | int | UUID) -> str:
    """
    Build a deterministic cache key from a tag and ordered parameters.

    Args:
        tag: Namespace tag for the kind of cached value.
        *params: Ordered key parameters.

    Returns:
        str: Delimiter-joined key, e.g. ``posts:1:10``.

    Examples:
        >>> build_key("posts", 1, 10)
        'posts:1:10'
        >>> build_key("cache", "user", 123, "profile")
        'cache:user:123:profile'
    """
    return KEY_DELIMITER.join([tag, *(str(param) for param in params)])


def posts_list_key(page: int, step: int) -> str:
    """Generate cache key for one page of the post listing."""
    return build_key(POSTS_LIST_TAG, page, step)


def post_id_key(post_id: UUID | str) -> str:
    """Generate cache key for a single post by ID."""
    return build_key(POST_TAG, post_id)

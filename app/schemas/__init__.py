from app.schemas.health import HealthResponse, RootResponse
from app.schemas.post import PostCreate, PostListAdapter, PostResponse, PostUpdate

__all__ = [
    "HealthResponse",
    "PostCreate",
    "PostListAdapter",
    "PostResponse",
    "PostUpdate",
    "RootResponse",
]

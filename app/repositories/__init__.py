from app.repositories.base import BaseRepository
from app.repositories.post import PostRepository

__all__ = ["BaseRepository", "PostRepository"]

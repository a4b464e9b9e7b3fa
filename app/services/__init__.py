from app.services.blog import BlogService

__all__ = ["BlogService"]

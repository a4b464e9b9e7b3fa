from app.managers.cache_manager import CacheManager, cache_manager

__all__ = ["CacheManager", "cache_manager"]

from app.clients.memory_client import MemoryClient
from app.clients.protocols import CacheClientProtocol
from app.clients.redis_client import RedisClient

__all__ = ["CacheClientProtocol", "MemoryClient", "RedisClient"]

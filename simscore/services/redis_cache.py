import redis
from typing import Iterator, Optional, TypeVar, Type
from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class RedisCache:
    """Thin pydantic-aware wrapper around a Redis client."""

    def __init__(self, url: str, client: Optional[redis.Redis] = None):
        self.client = client or redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=5,
        )

    def get(self, key: str, model: Type[T]) -> Optional[T]:
        """Get cached item and deserialize to Pydantic model."""
        data = self.client.get(key)
        if data:
            return model.model_validate_json(data)
        return None

    def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        """Cache Pydantic model with TTL."""
        self.client.setex(
            key,
            ttl_seconds,
            value.model_dump_json(),
        )

    def delete(self, key: str) -> None:
        """Invalidate single cache entry."""
        self.client.delete(key)

    def keys(self, pattern: str) -> Iterator[str]:
        """Iterate keys matching pattern without blocking the server."""
        return self.client.scan_iter(match=pattern)

from typing import Optional, Iterable, List
import json
import logging
from redis.asyncio import Redis

from app.domain.models.product import SimilarityEdge

logger = logging.getLogger(__name__)


class SimilarityCacheRepo:
    """
    Adapter caching raw similarity edges in Redis.
    Stores store data only (never hydrated recommendations).
    Redis errors are logged and behave like a cache miss.
    """
    def __init__(self, redis: Redis, ttl: int, key_prefix: str = "sim"):
        """
        Args:
            redis: Redis client instance
            ttl: expiration in seconds for each cached edge list
            key_prefix: namespace for cache keys
        """
        self.cache = redis
        self.ttl = ttl
        self.prefix = key_prefix

    def key(self, source_code: str, count: int) -> str:
        return f"{self.prefix}:{source_code}:{count}"

    async def get(self, source_code: str, count: int) -> Optional[List[SimilarityEdge]]:
        """
        Retrieve cached edges for (source_code, count).
        Returns None if not found or if Redis fails.
        """
        key = self.key(source_code, count)
        try:
            raw = await self.cache.get(key)
        except Exception as e:
            logger.warning("similarity cache get error key=%s err=%s", key, e)
            return None
        if not raw:
            return None
        try:
            return [SimilarityEdge.model_validate(x) for x in json.loads(raw)]
        except (ValueError, TypeError) as e:
            logger.warning("similarity cache corrupt entry key=%s err=%s", key, e)
            return None

    async def set(self, source_code: str, count: int, edges: Iterable[SimilarityEdge]) -> None:
        key = self.key(source_code, count)
        payload = [e.model_dump() for e in edges]
        try:
            await self.cache.set(key, json.dumps(payload, separators=(",", ":")), ex=self.ttl)
        except Exception as e:
            logger.warning("similarity cache set error key=%s err=%s", key, e)

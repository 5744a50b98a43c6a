import logging
import zlib
from typing import Optional
import redis

from .config import get_settings
from .interfaces import CacheInterface

logger = logging.getLogger(__name__)


class CacheService(CacheInterface):
    """Best-effort Redis cache (UTF-8 text + optional zlib).

    Redis errors never escape: reads degrade to a miss, writes to a no-op.
    """

    def __init__(self, url: Optional[str] = None, compress: Optional[bool] = None,
                 client: Optional[redis.Redis] = None, logger: logging.Logger = logger):
        settings = get_settings()
        self.redis = client if client is not None else redis.Redis.from_url(
            url or settings.REDIS_URL, decode_responses=False
        )
        self.compress = settings.CACHE_COMPRESS if compress is None else compress
        self.logger = logger

    @staticmethod
    def search_key(query: str, page: int) -> str:
        return f"omdb:search:{query}:{page}"

    @staticmethod
    def detail_key(imdb_id: str) -> str:
        return f"omdb:detail:{imdb_id}"

    def get(self, key: str) -> Optional[str]:
        try:
            data = self.redis.get(key)
        except redis.RedisError as e:
            self.logger.warning(f"cache get error for {key}: {e}")
            return None
        if data is None:
            return None
        if self.compress:
            try:
                data = zlib.decompress(data)
            except zlib.error:
                pass
        try:
            return data.decode("utf-8") if isinstance(data, bytes) else str(data)
        except UnicodeDecodeError:
            self.logger.warning(f"cache value for {key} is not valid UTF-8, treating as miss")
            return None

    def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        raw = value.encode("utf-8")
        payload = zlib.compress(raw) if self.compress else raw
        try:
            self.redis.setex(key, ttl_seconds, payload)
        except redis.RedisError as e:
            self.logger.warning(f"cache set error for {key}: {e}")
            return False
        return True

    def delete(self, key: str) -> int:
        try:
            return int(self.redis.delete(key))
        except redis.RedisError as e:
            self.logger.warning(f"cache delete error for {key}: {e}")
            return 0

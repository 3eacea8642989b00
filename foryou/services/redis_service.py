import redis.asyncio as redis
from loguru import logger

from foryou.core.config import settings


class RedisService:
    def __init__(self, url: str | None = None) -> None:
        self.url = settings.REDIS_URL if url is None else url
        self._client: redis.Redis | None = None

    @property
    def configured(self) -> bool:
        return bool(self.url)

    async def get_client(self) -> redis.Redis:
        if not self.url:
            raise RuntimeError("REDIS_URL is not configured")
        if self._client is None:
            logger.info("Creating Redis client for RedisService")
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
                encoding="utf-8",
                socket_connect_timeout=5,
                socket_timeout=5,
                max_connections=settings.REDIS_MAX_CONNECTIONS,
                health_check_interval=30,
                socket_keepalive=True,
            )
        return self._client

    async def get_hash(self, key: str) -> dict[str, str]:
        """Return every field of a Redis hash, in the order Redis reports them.

        Errors propagate: record loading decides how to degrade.
        """
        client = await self.get_client()
        return await client.hgetall(key)

    async def close(self) -> None:
        """Close and disconnect the Redis client"""
        if self._client is not None:
            try:
                await self._client.aclose()
                logger.info("RedisService client closed")
            except (redis.RedisError, OSError) as exc:
                logger.warning(f"Failed to close RedisService client: {exc}")
            finally:
                self._client = None


redis_service = RedisService()

import redis.asyncio as redis
from loguru import logger

from roomi.core.config import settings


class RedisService:
    """Owns the shared Redis client and the key namespace for all stores."""

    def __init__(self, client: redis.Redis | None = None, prefix: str | None = None) -> None:
        self._client: redis.Redis | None = client
        self.prefix = settings.REDIS_KEY_PREFIX if prefix is None else prefix
        if client is None and not settings.REDIS_URL:
            logger.warning("REDIS_URL is not set. Redis operations will fail until configured.")

    async def get_client(self) -> redis.Redis:
        if self._client is None:
            logger.info("Creating Redis client for RedisService")
            self._client = redis.from_url(
                settings.REDIS_URL,
                decode_responses=True,
                encoding="utf-8",
                socket_connect_timeout=5,
                socket_timeout=5,
                max_connections=settings.REDIS_MAX_CONNECTIONS,
                health_check_interval=30,
                socket_keepalive=True,
            )
        return self._client

    def key(self, template: str, **params: str) -> str:
        """Build a namespaced key from one of the templates in roomi.core.constants."""
        return f"{self.prefix}{template.format(**params)}"

    async def ping(self) -> bool:
        try:
            client = await self.get_client()
            return bool(await client.ping())
        except (redis.RedisError, OSError) as exc:
            logger.warning(f"Redis ping failed: {exc}")
            return False

    async def close(self) -> None:
        """Close and disconnect the Redis client"""
        if self._client is not None:
            try:
                await self._client.aclose()
                logger.info("RedisService client closed")
            except Exception as exc:
                logger.warning(f"Failed to close RedisService client: {exc}")
            finally:
                self._client = None


redis_service = RedisService()

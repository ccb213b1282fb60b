import asyncio
import redis.asyncio as redis
from redis.exceptions import RedisError
from typing import Optional
from app.core.exceptions import StoreUnavailableError
import logging

logger = logging.getLogger(__name__)

class RedisClient:
    """Thin async wrapper that reports every redis failure as StoreUnavailableError"""

    def __init__(self, url: str):
        self.url = url
        self.redis = None
        self._connect_lock = asyncio.Lock()

    async def connect(self):
        """Connect to Redis"""
        async with self._connect_lock:
            if self.redis is None:
                await self._open()

    async def _open(self):
        client = redis.from_url(
            self.url,
            encoding="utf-8",
            decode_responses=True
        )
        try:
            # Published only once the ping succeeds
            await client.ping()
        except RedisError as e:
            await client.aclose()
            logger.error(f"Redis connection failed: {str(e)}")
            raise StoreUnavailableError() from e

        self.redis = client
        logger.info("Redis connected successfully")

    async def disconnect(self):
        """Disconnect from Redis"""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            logger.info("Redis disconnected")

    async def get(self, key: str) -> Optional[str]:
        """Get value by key"""
        if not self.redis:
            await self.connect()
        try:
            return await self.redis.get(key)
        except RedisError as e:
            logger.error(f"Redis GET failed: {str(e)}")
            raise StoreUnavailableError() from e

    async def set(self, key: str, value: str, expire: int = None):
        """Set key-value pair"""
        if not self.redis:
            await self.connect()
        try:
            return await self.redis.set(key, value, ex=expire)
        except RedisError as e:
            logger.error(f"Redis SET failed: {str(e)}")
            raise StoreUnavailableError() from e

    async def delete(self, key: str):
        """Delete key"""
        if not self.redis:
            await self.connect()
        try:
            return await self.redis.delete(key)
        except RedisError as e:
            logger.error(f"Redis DEL failed: {str(e)}")
            raise StoreUnavailableError() from e

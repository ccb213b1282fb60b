"""Token -> session payload stores.

Every entry is keyed independently by its opaque token; no operation spans
more than one key. Backend failures surface as StoreUnavailableError and are
never reported as a missing session.
"""
import logging
from typing import Dict, Optional

from pydantic import ValidationError as PayloadError

from app.core.config import Settings
from app.core.redis import RedisClient
from app.schemas.session.session import SessionData

logger = logging.getLogger(__name__)


class SessionStore:
    """Abstract session store"""

    async def get(self, token: str) -> Optional[SessionData]:
        """Return the payload stored under token, or None"""
        raise NotImplementedError

    async def set(self, token: str, payload: SessionData) -> None:
        """Store payload under token, replacing any previous value"""
        raise NotImplementedError

    async def delete(self, token: str) -> None:
        """Remove token; a no-op when absent"""
        raise NotImplementedError

    async def close(self) -> None:
        pass


class InMemorySessionStore(SessionStore):
    """Process-local store for development and tests"""

    def __init__(self):
        self._store: Dict[str, str] = {}

    async def get(self, token: str) -> Optional[SessionData]:
        raw = self._store.get(token)
        if raw is None:
            return None
        return SessionData.from_json(raw)

    async def set(self, token: str, payload: SessionData) -> None:
        self._store[token] = payload.to_json()

    async def delete(self, token: str) -> None:
        self._store.pop(token, None)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, token: str) -> bool:
        return token in self._store


class RedisSessionStore(SessionStore):
    """Session store backed by redis; entries expire only if a TTL is configured"""

    def __init__(self, client: RedisClient, ttl_seconds: Optional[int] = None):
        self.client = client
        self.ttl_seconds = ttl_seconds

    async def get(self, token: str) -> Optional[SessionData]:
        raw = await self.client.get(token)
        if raw is None:
            return None
        try:
            return SessionData.from_json(raw)
        except PayloadError:
            logger.warning("Discarding unreadable session payload")
            return None

    async def set(self, token: str, payload: SessionData) -> None:
        await self.client.set(token, payload.to_json(), expire=self.ttl_seconds)

    async def delete(self, token: str) -> None:
        await self.client.delete(token)

    async def close(self) -> None:
        await self.client.disconnect()


def build_session_store(settings: Settings) -> SessionStore:
    """Create the store selected by SESSION_BACKEND"""
    if settings.SESSION_BACKEND == "memory":
        logger.info("Using in-memory session store")
        return InMemorySessionStore()

    return RedisSessionStore(
        RedisClient(settings.REDIS_URL),
        ttl_seconds=settings.SESSION_TTL_SECONDS,
    )

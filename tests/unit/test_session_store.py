import asyncio
import json
from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError, TimeoutError as RedisTimeoutError

from app.core.config import Settings
from app.core.exceptions import StoreUnavailableError
from app.core.redis import RedisClient
from app.schemas.session.session import SessionData
from app.services.session.session_store import (
    InMemorySessionStore,
    RedisSessionStore,
    build_session_store,
)


@pytest.mark.asyncio
class TestInMemorySessionStore:

    async def test_set_then_get(self):
        store = InMemorySessionStore()
        await store.set("tok", SessionData(customer_id="7"))

        session = await store.get("tok")

        assert session.customer_id == "7"
        assert session.created_at is not None

    async def test_get_unknown_token(self):
        assert await InMemorySessionStore().get("missing") is None

    async def test_set_overwrites(self):
        store = InMemorySessionStore()
        await store.set("tok", SessionData(customer_id="1"))
        await store.set("tok", SessionData(customer_id="2"))

        assert (await store.get("tok")).customer_id == "2"
        assert len(store) == 1

    async def test_delete_is_idempotent(self):
        store = InMemorySessionStore()
        await store.set("tok", SessionData(customer_id="1"))

        await store.delete("tok")
        await store.delete("tok")

        assert "tok" not in store

    async def test_entries_are_independent(self):
        store = InMemorySessionStore()
        await store.set("a", SessionData(customer_id="1"))
        await store.set("b", SessionData(customer_id="1"))

        await store.delete("a")

        assert await store.get("a") is None
        assert (await store.get("b")).customer_id == "1"


def test_payload_uses_camel_case_keys():
    raw = SessionData(customer_id="42").to_json()

    payload = json.loads(raw)
    assert payload["customerId"] == "42"
    assert "createdAt" in payload
    assert SessionData.from_json(raw).customer_id == "42"


def make_redis_store(ttl_seconds=None):
    client = RedisClient("redis://localhost:6379/0")
    client.redis = AsyncMock()
    return RedisSessionStore(client, ttl_seconds=ttl_seconds), client.redis


@pytest.mark.asyncio
class TestRedisSessionStore:

    async def test_set_writes_json_under_token(self):
        store, backend = make_redis_store()

        await store.set("tok", SessionData(customer_id="3"))

        key, value = backend.set.await_args.args
        assert key == "tok"
        assert json.loads(value)["customerId"] == "3"
        assert backend.set.await_args.kwargs == {"ex": None}

    async def test_set_applies_configured_ttl(self):
        store, backend = make_redis_store(ttl_seconds=3600)

        await store.set("tok", SessionData(customer_id="3"))

        assert backend.set.await_args.kwargs == {"ex": 3600}

    async def test_get_decodes_payload(self):
        store, backend = make_redis_store()
        backend.get.return_value = SessionData(customer_id="9").to_json()

        session = await store.get("tok")

        backend.get.assert_awaited_once_with("tok")
        assert session.customer_id == "9"

    async def test_get_missing_returns_none(self):
        store, backend = make_redis_store()
        backend.get.return_value = None

        assert await store.get("tok") is None

    async def test_get_unreadable_payload_returns_none(self):
        store, backend = make_redis_store()
        backend.get.return_value = "not json"

        assert await store.get("tok") is None

    async def test_delete(self):
        store, backend = make_redis_store()

        await store.delete("tok")

        backend.delete.assert_awaited_once_with("tok")

    @pytest.mark.parametrize("error", [RedisConnectionError("down"), RedisTimeoutError("slow")])
    async def test_backend_errors_raise_store_unavailable(self, error):
        store, backend = make_redis_store()
        backend.get.side_effect = error
        backend.set.side_effect = error
        backend.delete.side_effect = error

        with pytest.raises(StoreUnavailableError):
            await store.get("tok")
        with pytest.raises(StoreUnavailableError):
            await store.set("tok", SessionData(customer_id="1"))
        with pytest.raises(StoreUnavailableError):
            await store.delete("tok")

    async def test_failed_connect_raises_store_unavailable(self):
        broken = AsyncMock()
        broken.ping.side_effect = RedisConnectionError("refused")

        with patch("app.core.redis.redis.from_url", return_value=broken):
            store = RedisSessionStore(RedisClient("redis://nowhere:6379/0"))
            with pytest.raises(StoreUnavailableError):
                await store.get("tok")

        assert store.client.redis is None
        broken.aclose.assert_awaited_once()

    async def test_concurrent_first_use_connects_once(self):
        backend = AsyncMock()

        async def slow_ping():
            await asyncio.sleep(0)
            return True

        backend.ping.side_effect = slow_ping
        backend.get.return_value = None

        with patch("app.core.redis.redis.from_url", return_value=backend) as from_url:
            store = RedisSessionStore(RedisClient("redis://localhost:6379/0"))
            await asyncio.gather(*(store.get(f"tok-{i}") for i in range(5)))

        from_url.assert_called_once()
        assert backend.get.await_count == 5
        assert store.client.redis is backend

    async def test_close_disconnects(self):
        store, backend = make_redis_store()

        await store.close()

        backend.aclose.assert_awaited_once()
        assert store.client.redis is None


def test_build_session_store_selects_backend():
    memory = build_session_store(Settings(SESSION_BACKEND="memory"))
    redis_store = build_session_store(Settings(SESSION_BACKEND="redis", SESSION_TTL_SECONDS=60))

    assert isinstance(memory, InMemorySessionStore)
    assert isinstance(redis_store, RedisSessionStore)
    assert redis_store.ttl_seconds == 60

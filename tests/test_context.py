"""DependencyContext tests — caller-owned lifecycle of the service map.

Tests cover:
    - dependencies unavailable before connect and after disconnect
    - connect exposes all four keys; disconnect is idempotent and clears the cache
    - Factories build unconnected contexts from Settings
    - End to end: store -> cache -> log through one chained Effect
"""

import logging

import pytest
from sqlalchemy import text

from effect_chain import ContextError, DEPENDENCY_KEYS
from effect_chain import access as A
from effect_chain.config import Settings
from effect_chain.services import (
    DependencyContext,
    HttpTransport,
    LoggerLog,
    MemoryCache,
    SqlStore,
    create_context,
    create_test_context,
)


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        test_database_url="sqlite+aiosqlite:///:memory:",
        cache_default_ttl_seconds=30,
    )


@pytest.mark.asyncio
async def test_dependencies_require_connection(settings):
    ctx = create_test_context(settings)
    with pytest.raises(ContextError):
        ctx.dependencies
    await ctx.transport.aclose()
    await ctx.store.dispose()


@pytest.mark.asyncio
async def test_connect_exposes_all_keys(settings):
    ctx = create_test_context(settings)
    await ctx.connect()
    try:
        deps = ctx.dependencies
        assert set(deps) == set(DEPENDENCY_KEYS)
        assert deps["cache"] is ctx.cache
        assert ctx.connected
    finally:
        await ctx.disconnect()


@pytest.mark.asyncio
async def test_connect_twice_is_noop(settings):
    ctx = create_test_context(settings)
    assert await ctx.connect() is ctx
    assert await ctx.connect() is ctx
    await ctx.disconnect()


@pytest.mark.asyncio
async def test_disconnect_clears_cache_and_is_idempotent(settings):
    async with create_test_context(settings) as ctx:
        await ctx.cache.set("k", "v")

    assert not ctx.connected
    assert len(ctx.cache) == 0
    with pytest.raises(ContextError):
        ctx.dependencies
    await ctx.disconnect()


@pytest.mark.asyncio
async def test_context_runs_effects(settings):
    async with create_test_context(settings) as ctx:
        await ctx.cache.set("greeting", "hello")
        assert await ctx.run(A.with_cache(lambda c: c.get("greeting"))) == "hello"


def test_create_context_wires_services(settings):
    ctx = create_context(settings)
    assert isinstance(ctx, DependencyContext)
    assert isinstance(ctx.store, SqlStore)
    assert isinstance(ctx.cache, MemoryCache)
    assert isinstance(ctx.log, LoggerLog)
    assert isinstance(ctx.transport, HttpTransport)
    assert ctx.log.logger.name == "effect_chain"
    assert not ctx.connected


def test_create_test_context_uses_test_logger(settings):
    ctx = create_test_context(settings)
    assert ctx.log.logger.name == "effect_chain.test"


def load_user(user_id):
    async def query(store):
        async with store.session() as session:
            result = await session.execute(
                text("SELECT name FROM users WHERE id = :id"), {"id": user_id},
            )
            return result.scalar_one()

    return A.with_store(query)


def remember_user(user_id):
    return (
        load_user(user_id)
        .chain(lambda name: A.with_cache(lambda c: c.set(f"user:{user_id}", name)).transform(lambda _: name))
        .chain(lambda name: A.with_log(lambda log: log.info("user cached", user_id)).transform(lambda _: name))
    )


@pytest.mark.asyncio
async def test_end_to_end_store_cache_log(settings, caplog):
    caplog.set_level(logging.INFO, logger="effect_chain.test")

    async with create_test_context(settings) as ctx:
        async with ctx.store.session() as session:
            await session.execute(text("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT)"))
            await session.execute(text("INSERT INTO users VALUES (7, 'Hedy')"))
            await session.commit()

        assert await remember_user(7).run(ctx.dependencies) == "Hedy"
        assert await ctx.cache.get("user:7") == "Hedy"

    messages = [r.getMessage() for r in caplog.records if r.name == "effect_chain.test"]
    assert messages == ["user cached"]


@pytest.mark.asyncio
async def test_create_context_from_default_settings(monkeypatch):
    monkeypatch.delenv("EFFECT_CHAIN_DATABASE_URL", raising=False)
    ctx = create_context(Settings())
    try:
        assert ctx.store.engine.url.drivername == "postgresql+asyncpg"
        assert not ctx.connected
    finally:
        await ctx.transport.aclose()
        await ctx.store.dispose()


class DictCache:
    """Cache handle with only get/set/delete: no lifecycle hooks."""

    def __init__(self):
        self.entries = {}

    async def get(self, key):
        return self.entries.get(key)

    async def set(self, key, value, ttl=None):
        self.entries[key] = value
        return "OK"

    async def delete(self, key):
        return 1 if self.entries.pop(key, None) is not None else 0


@pytest.mark.asyncio
async def test_context_accepts_handles_without_lifecycle_hooks(store, log, transport):
    cache = DictCache()
    async with DependencyContext(store=store, cache=cache, log=log, transport=transport) as ctx:
        await ctx.run(A.with_cache(lambda c: c.set("k", "v")))
        assert ctx.dependencies["store"] is store

    assert not ctx.connected
    assert cache.entries == {"k": "v"}

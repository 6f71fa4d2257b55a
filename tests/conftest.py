"""Root conftest — shared test configuration and fake dependency maps.

Invariants:
    - Tests never reach a real database or network
    - Settings cache is cleared around every test so env overrides apply
"""

import os

# Ensure tests never pick up a real database from the environment
os.environ.setdefault("EFFECT_CHAIN_TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest

from effect_chain.config import get_settings
from effect_chain.services import LoggerLog, MemoryCache


class FakeStore:
    """Stand-in for a store handle: just enough query surface for tests."""

    def __init__(self):
        self.users = {1: "Ada", 2: "Grace"}
        self.calls: list[int] = []

    async def fetch_user(self, user_id: int) -> str:
        self.calls.append(user_id)
        return self.users[user_id]


class FakeTransport:
    """Records outbound calls and answers every GET with {"ok": True}."""

    def __init__(self):
        self.requests: list[tuple[str, str]] = []

    async def get(self, url: str, **options):
        self.requests.append(("GET", url))
        return {"ok": True}


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def cache():
    return MemoryCache()


@pytest.fixture
def log():
    return LoggerLog("effect_chain.test")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def deps(store, cache, log, transport):
    return {"store": store, "cache": cache, "log": log, "transport": transport}

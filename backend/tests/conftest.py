"""Shared fixtures: an API app wired to an in-memory store.

Every test gets a fresh store seeded with user ``test`` (password ``test``)
holding session token ``test``.
"""

import os

import pytest
from litestar.testing import TestClient

# Keep the module-level app in app.py from reading a real config file
os.environ.setdefault("CONFIG_FILE", "/nonexistent/config.json")

from app import create_app  # noqa: E402
from core.config import AppConfig, PasswordConfig  # noqa: E402
from core.password import configure_hasher  # noqa: E402
from memory_store import MemoryStore  # noqa: E402


TOKEN = "test"


@pytest.fixture
def test_config() -> AppConfig:
    # Cheap argon2 parameters keep the suite fast
    config = AppConfig(password=PasswordConfig(time_cost=1, memory_cost=8, parallelism=1))
    configure_hasher(config.password)
    return config


@pytest.fixture
def store(test_config) -> MemoryStore:
    store = MemoryStore()
    store.add_user("test", "test", "test", token=TOKEN)
    return store


@pytest.fixture
def client(store, test_config):
    app = create_app(config=test_config, store_factory=store.factory())
    with TestClient(app=app) as client:
        yield client


@pytest.fixture
def auth() -> dict[str, str]:
    return {"Authorization": TOKEN}

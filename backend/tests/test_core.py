"""Config loading, password hashing, paging maths, SQL helpers, error envelope."""

import json

import pytest
from litestar import get
from litestar.testing import TestClient

from app import create_app
from core.config import AppConfig, PasswordConfig
from core.password import configure_hasher, hash_password, needs_rehash, verify_password
from core.responses import Paging
from core.store import like_pattern, sql_update_user


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


def test_config_defaults_when_file_missing(tmp_path, monkeypatch):
    monkeypatch.setenv("CONFIG_FILE", str(tmp_path / "missing.json"))
    config = AppConfig.load()
    assert config.loaded_from is None
    assert config.session.expire_minutes == 24 * 60
    assert config.logging.level == "INFO"


def test_config_loads_sections_and_ignores_unknown_keys(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "database": {"host": "db", "name": "crm", "unknown": 1},
                "session": {"expire_minutes": 5},
                "password": {"time_cost": 2},
                "logging": {"format": "json"},
            }
        )
    )
    monkeypatch.setenv("CONFIG_FILE", str(path))

    config = AppConfig.load()
    assert config.loaded_from == str(path)
    assert config.database.host == "db"
    assert config.database.port == 5432
    assert "dbname=crm" in config.database.conninfo
    assert config.session.expire_minutes == 5
    assert config.password.time_cost == 2
    assert config.logging.format == "json"


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------


@pytest.fixture
def cheap_hasher():
    configure_hasher(PasswordConfig(time_cost=1, memory_cost=8, parallelism=1))


def test_hash_is_salted_and_verifiable(cheap_hasher):
    first = hash_password("rahasia")
    second = hash_password("rahasia")
    assert first != second
    assert verify_password("rahasia", first)
    assert not verify_password("salah", first)


def test_verify_rejects_malformed_hash(cheap_hasher):
    assert not verify_password("rahasia", "not-a-hash")


def test_needs_rehash_after_cost_change(cheap_hasher):
    hash = hash_password("rahasia")
    assert not needs_rehash(hash)

    configure_hasher(PasswordConfig(time_cost=2, memory_cost=8, parallelism=1))
    assert needs_rehash(hash)
    assert verify_password("rahasia", hash)


# ---------------------------------------------------------------------------
# Paging
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "total,size,expected",
    [(25, 10, 3), (25, 5, 5), (0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2)],
)
def test_total_page(total, size, expected):
    assert Paging.of(1, size, total).total_page == expected


def test_paging_echoes_page_past_the_end():
    paging = Paging.of(100, 5, 25)
    assert (paging.current_page, paging.size, paging.total_page) == (100, 5, 5)


# ---------------------------------------------------------------------------
# SQL helpers
# ---------------------------------------------------------------------------


def test_like_pattern_escapes_wildcards():
    assert like_pattern(None) is None
    assert like_pattern("ko") == "%ko%"
    assert like_pattern("50%_off\\") == "%50\\%\\_off\\\\%"


def test_sql_update_user_only_sets_known_fields():
    sql = sql_update_user({"name", "pwhash", "username"})
    assert "name = %(name)s" in sql
    assert "pwhash = %(pwhash)s" in sql
    assert "username = %(username)s" in sql.split("WHERE")[1]
    assert "username = %(username)s" not in sql.split("WHERE")[0]


def test_sql_update_user_requires_a_field():
    with pytest.raises(ValueError):
        sql_update_user({"username"})


# ---------------------------------------------------------------------------
# Error envelope
# ---------------------------------------------------------------------------


def test_unknown_route_uses_error_envelope(client):
    res = client.get("/api/nothing-here")
    assert res.status_code == 404
    assert "errors" in res.json()


def test_wrong_method_uses_error_envelope(client):
    res = client.put("/api/users/login", json={})
    assert res.status_code == 405
    assert "errors" in res.json()


def test_unhandled_exception_is_500_without_details(store, test_config):
    @get("/boom")
    async def boom() -> None:
        raise RuntimeError("secret internal detail")

    app = create_app(config=test_config, store_factory=store.factory())
    app.register(boom)

    with TestClient(app=app) as client:
        res = client.get("/boom")

    assert res.status_code == 500
    assert res.json() == {"errors": "Internal server error"}


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["config_loaded"] is False
    assert body["database_connected"] is False

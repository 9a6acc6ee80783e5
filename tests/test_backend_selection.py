import json
import logging

import pytest

from account_store.exceptions import StoreInitializationError
from account_store.stores import DocumentUserStore, RelationalUserStore, initialize


def test_relational_selected_when_engine_available(settings):
    store = initialize(settings)
    try:
        assert isinstance(store, RelationalUserStore)
        assert store.backend_name == "relational"
        assert store.has_users() is False
    finally:
        store.dispose()


def test_relational_does_not_touch_json_file(settings, tmp_path):
    store = initialize(settings)
    store.dispose()
    assert not (tmp_path / "auth.json").exists()


def test_missing_driver_falls_back_to_document(settings, tmp_path, caplog):
    settings.DATABASE_URL = f"sqlite+nosuchdriver:///{tmp_path / 'auth.db'}"

    with caplog.at_level(logging.WARNING, logger="account_store.stores.selector"):
        store = initialize(settings)

    assert isinstance(store, DocumentUserStore)
    assert store.backend_name == "document"
    assert any("JSON fallback" in r.getMessage() for r in caplog.records)


def test_unopenable_database_file_falls_back(settings, tmp_path):
    # A directory cannot be opened as a database file
    settings.DATABASE_URL = f"sqlite:///{tmp_path}"

    store = initialize(settings)
    assert isinstance(store, DocumentUserStore)


def test_fallback_creates_empty_document(settings, tmp_path):
    settings.STORE_BACKEND = "document"

    store = initialize(settings)

    path = tmp_path / "auth.json"
    assert store.path == path
    assert json.loads(path.read_text(encoding="utf-8")) == {"users": []}
    assert store.has_users() is False


def test_fallback_creates_missing_parent_directories(settings, tmp_path):
    settings.STORE_BACKEND = "document"
    settings.JSON_STORE_PATH = str(tmp_path / "nested" / "dir" / "auth.json")

    store = initialize(settings)
    assert store.path.exists()


def test_fallback_keeps_existing_document(settings, tmp_path):
    path = tmp_path / "auth.json"
    existing = {
        "users": [
            {
                "id": 7,
                "username": "alice",
                "password_hash": "h1",
                "created_at": "2025-01-01T00:00:00+00:00",
                "last_login": None,
                "is_active": True,
            }
        ]
    }
    path.write_text(json.dumps(existing), encoding="utf-8")
    settings.STORE_BACKEND = "document"

    store = initialize(settings)

    assert store.get_user_by_username("alice").id == 7
    assert store.create_user("bob", "h2").id == 8


def test_relational_required_raises_instead_of_falling_back(settings, tmp_path):
    settings.DATABASE_URL = f"sqlite+nosuchdriver:///{tmp_path / 'auth.db'}"
    settings.RELATIONAL_REQUIRED = True

    with pytest.raises(StoreInitializationError):
        initialize(settings)
    assert not (tmp_path / "auth.json").exists()


def test_unwritable_fallback_is_fatal(settings, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    settings.STORE_BACKEND = "document"
    settings.JSON_STORE_PATH = str(blocker / "auth.json")

    with pytest.raises(StoreInitializationError) as excinfo:
        initialize(settings)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_fatal_when_both_backends_unavailable(settings, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    settings.DATABASE_URL = f"sqlite+nosuchdriver:///{tmp_path / 'auth.db'}"
    settings.JSON_STORE_PATH = str(blocker / "auth.json")

    with pytest.raises(StoreInitializationError):
        initialize(settings)


def test_initialize_uses_environment_settings(monkeypatch, tmp_path):
    from account_store.config import get_settings

    monkeypatch.setenv("STORE_BACKEND", "document")
    monkeypatch.setenv("JSON_STORE_PATH", str(tmp_path / "env.json"))
    get_settings.cache_clear()
    try:
        store = initialize()
        assert isinstance(store, DocumentUserStore)
        assert store.path == tmp_path / "env.json"
    finally:
        get_settings.cache_clear()

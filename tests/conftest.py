import json
from datetime import datetime

import pytest
from sqlalchemy import text


@pytest.fixture
def settings(tmp_path):
    from account_store.config import Settings

    return Settings(
        STORE_BACKEND="relational",
        DATABASE_URL=f"sqlite+pysqlite:///{tmp_path / 'auth.db'}",
        JSON_STORE_PATH=str(tmp_path / "auth.json"),
        LOG_JSON=False,
    )


@pytest.fixture
def relational_store(settings):
    from account_store.stores.selector import probe_relational

    store = probe_relational(settings.DATABASE_URL)
    try:
        yield store
    finally:
        store.dispose()


@pytest.fixture
def document_store(settings):
    from account_store.stores.selector import open_document_store

    return open_document_store(settings.JSON_STORE_PATH)


@pytest.fixture(params=["relational", "document"])
def store(request):
    return request.getfixturevalue(f"{request.param}_store")


def deactivate_in_storage(store, user_id: int) -> None:
    """Flip is_active behind the store's back, the way an admin tool would."""
    if store.backend_name == "relational":
        with store.engine.begin() as conn:
            conn.execute(text("UPDATE users SET is_active = 0 WHERE id = :id"), {"id": user_id})
        return
    data = json.loads(store.path.read_text(encoding="utf-8"))
    for user in data["users"]:
        if user["id"] == user_id:
            user["is_active"] = False
    store.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def count_rows(store) -> int:
    if store.backend_name == "relational":
        with store.engine.connect() as conn:
            return conn.execute(text("SELECT COUNT(*) FROM users")).scalar_one()
    return len(json.loads(store.path.read_text(encoding="utf-8"))["users"])


@pytest.fixture
def force_inactive():
    return deactivate_in_storage


@pytest.fixture
def row_count():
    return count_rows


def set_last_login_in_storage(store, user_id: int, when: datetime) -> None:
    if store.backend_name == "relational":
        with store.engine.begin() as conn:
            conn.execute(
                text("UPDATE users SET last_login = :when WHERE id = :id"),
                {"when": when.strftime("%Y-%m-%d %H:%M:%S"), "id": user_id},
            )
        return
    data = json.loads(store.path.read_text(encoding="utf-8"))
    for user in data["users"]:
        if user["id"] == user_id:
            user["last_login"] = when.isoformat()
    store.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


@pytest.fixture
def seed_last_login():
    return set_last_login_in_storage

"""
Backend selection. Called once at process start; the returned store is the
only backend for the life of the process and is handed to callers explicitly.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import Settings, get_settings
from ..database import create_db_engine, init_db
from ..exceptions import StoreInitializationError
from .base import UserStore
from .document import DocumentUserStore
from .relational import RelationalUserStore

logger = logging.getLogger(__name__)


def probe_relational(database_url: str) -> RelationalUserStore:
    """
    Load the driver, open the database and provision the users table.
    Raises whatever the engine raises; the caller decides whether that is fatal.
    """
    engine = create_db_engine(database_url)
    try:
        with engine.connect():
            pass
        init_db(engine)
    except Exception:
        engine.dispose()
        raise
    return RelationalUserStore(engine)


def open_document_store(json_path: str) -> DocumentUserStore:
    store = DocumentUserStore(json_path)
    try:
        store.ensure_file()
    except OSError as exc:
        logger.error("Error initializing JSON fallback store at %s: %s", json_path, exc)
        raise StoreInitializationError(f"Cannot create user document at {json_path}") from exc
    return store


def initialize(settings: Optional[Settings] = None) -> UserStore:
    settings = settings or get_settings()

    if settings.STORE_BACKEND == "relational":
        try:
            store = probe_relational(settings.DATABASE_URL)
        except Exception as exc:
            if settings.RELATIONAL_REQUIRED:
                raise StoreInitializationError("Relational store required but unavailable") from exc
            logger.warning("Relational store unavailable, will use JSON fallback: %s", exc)
        else:
            logger.info("Connected to relational user store")
            return store

    store = open_document_store(settings.JSON_STORE_PATH)
    logger.info("Using JSON fallback for user store at %s", store.path)
    return store

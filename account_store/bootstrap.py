import logging

from .config import Settings
from .schemas import CreatedUser
from .stores.base import UserStore

logger = logging.getLogger(__name__)


def ensure_default_user(store: UserStore, settings: Settings) -> CreatedUser | None:
    if store.has_users():
        return None
    if not settings.DEFAULT_USERNAME or not settings.DEFAULT_PASSWORD_HASH:
        logger.warning("User store is empty and no default user is configured")
        return None
    created = store.create_user(settings.DEFAULT_USERNAME, settings.DEFAULT_PASSWORD_HASH)
    logger.info("Created default user %s on %s backend", created.username, store.backend_name)
    return created

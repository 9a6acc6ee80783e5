from .bootstrap import ensure_default_user
from .config import Settings, get_settings
from .exceptions import AccountStoreError, DuplicateUsernameError, StoreInitializationError
from .schemas import CreatedUser, UserProfile, UserRecord
from .stores import DocumentUserStore, RelationalUserStore, UserStore, initialize

__version__ = "0.1.0"

__all__ = [
    "AccountStoreError",
    "CreatedUser",
    "DocumentUserStore",
    "DuplicateUsernameError",
    "RelationalUserStore",
    "Settings",
    "StoreInitializationError",
    "UserProfile",
    "UserRecord",
    "UserStore",
    "ensure_default_user",
    "get_settings",
    "initialize",
]

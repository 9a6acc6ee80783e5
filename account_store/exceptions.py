class AccountStoreError(RuntimeError):
    """Base class for account store failures."""


class StoreInitializationError(AccountStoreError):
    """No backend could be made durable."""


class DuplicateUsernameError(AccountStoreError, ValueError):
    def __init__(self, username: str):
        super().__init__(f"Active user already exists: {username!r}")
        self.username = username

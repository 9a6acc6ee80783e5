"""
User store interface shared by the relational and document backends.
Both variants must honor the same contract: lookups only see active users,
ids are store-assigned and never reused, and not-found is None rather than an error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..schemas import CreatedUser, UserProfile, UserRecord


class UserStore(ABC):
    backend_name: str = ""

    @abstractmethod
    def has_users(self) -> bool:
        """True when at least one user row exists, active or not."""
        ...

    @abstractmethod
    def create_user(self, username: str, password_hash: str) -> CreatedUser:
        """Insert an active user. Raises DuplicateUsernameError if an active user has the name."""
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    def get_user_by_id(self, user_id: int) -> Optional[UserProfile]:
        """Restricted projection; never includes password_hash."""
        ...

    @abstractmethod
    def update_last_login(self, user_id: int) -> None:
        """Stamp last_login with the current time. Unknown ids are a no-op."""
        ...

    @abstractmethod
    def deactivate_user(self, user_id: int) -> bool:
        """Soft delete. Returns False when no such user or already inactive."""
        ...

    def dispose(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} backend={self.backend_name!r}>"

"""
JSON document fallback: the whole user collection lives in one file that is
read in full for every operation and rewritten in full after every mutation.

Writes go through a temp file and os.replace, so readers never observe a torn
file. The in-process lock serializes read-modify-write cycles for this handle
only; separate processes sharing the file can still lose updates.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from ..exceptions import DuplicateUsernameError
from ..schemas import CreatedUser, UserProfile, UserRecord
from .base import UserStore

logger = logging.getLogger(__name__)


class DocumentUserStore(UserStore):
    backend_name = "document"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def ensure_file(self) -> None:
        """Create an empty collection if the file is absent. OSError propagates."""
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._write([])

    def has_users(self) -> bool:
        return len(self._read()) > 0

    def create_user(self, username: str, password_hash: str) -> CreatedUser:
        with self._lock:
            users = self._read()
            if any(u.username == username and u.is_active for u in users):
                raise DuplicateUsernameError(username)
            user = UserRecord(
                id=max((u.id for u in users), default=0) + 1,
                username=username,
                password_hash=password_hash,
                created_at=_utcnow(),
                last_login=None,
                is_active=True,
            )
            users.append(user)
            self._write(users)
        logger.info("Created user id=%s", user.id)
        return CreatedUser(id=user.id, username=user.username)

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        for user in self._read():
            if user.username == username and user.is_active:
                return user
        return None

    def get_user_by_id(self, user_id: int) -> Optional[UserProfile]:
        for user in self._read():
            if user.id == user_id and user.is_active:
                return user.to_profile()
        return None

    def update_last_login(self, user_id: int) -> None:
        with self._lock:
            users = self._read()
            user = _find(users, user_id)
            if user is None:
                return
            now = _utcnow()
            if user.last_login is None or now > user.last_login:
                user.last_login = now
            self._write(users)

    def deactivate_user(self, user_id: int) -> bool:
        with self._lock:
            users = self._read()
            user = _find(users, user_id)
            if user is None or not user.is_active:
                return False
            user.is_active = False
            self._write(users)
        logger.info("Deactivated user id=%s", user_id)
        return True

    def _read(self) -> list[UserRecord]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            users = data["users"]
            if not isinstance(users, list):
                raise TypeError("'users' is not a list")
            return [UserRecord.model_validate(item) for item in users]
        except FileNotFoundError:
            logger.warning("User document %s missing; treating as empty", self.path)
        except (OSError, ValueError, KeyError, TypeError, ValidationError) as exc:
            logger.warning("Could not load user document %s; treating as empty: %s", self.path, exc)
        return []

    def _write(self, users: list[UserRecord]) -> None:
        payload = {"users": [u.model_dump(mode="json") for u in users]}
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
                f.write("\n")
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.error("Could not save user document %s: %s", self.path, exc)
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


def _find(users: list[UserRecord], user_id: int) -> Optional[UserRecord]:
    for user in users:
        if user.id == user_id:
            return user
    return None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

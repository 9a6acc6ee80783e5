from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import Engine, func, or_, select, update
from sqlalchemy.exc import IntegrityError

from ..database import create_sessionmaker
from ..exceptions import DuplicateUsernameError
from ..models.user import User
from ..schemas import CreatedUser, UserProfile, UserRecord
from .base import UserStore

logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value; larger ids cannot exist in the table.
_MAX_ID = 2**63 - 1


def _storable_id(user_id: int) -> bool:
    return -_MAX_ID - 1 <= user_id <= _MAX_ID


class RelationalUserStore(UserStore):
    """Users table via SQLAlchemy. Driver errors propagate unchanged."""

    backend_name = "relational"

    def __init__(self, engine: Engine):
        self.engine = engine
        self._sessionmaker = create_sessionmaker(engine)

    def has_users(self) -> bool:
        with self._sessionmaker() as session:
            count = session.scalar(select(func.count()).select_from(User))
        return bool(count)

    def create_user(self, username: str, password_hash: str) -> CreatedUser:
        with self._sessionmaker() as session, session.begin():
            existing = session.scalar(
                select(User.id).where(User.username == username, User.is_active.is_(True))
            )
            if existing is not None:
                raise DuplicateUsernameError(username)
            user = User(username=username, password_hash=password_hash, is_active=True)
            session.add(user)
            try:
                session.flush()
            except IntegrityError as exc:
                # Lost a race with a concurrent create; the partial index caught it.
                raise DuplicateUsernameError(username) from exc
            user_id = user.id
        logger.info("Created user id=%s", user_id)
        return CreatedUser(id=user_id, username=username)

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with self._sessionmaker() as session:
            user = session.scalars(
                select(User).where(User.username == username, User.is_active.is_(True))
            ).first()
            if user is None:
                return None
            return UserRecord.model_validate(user, from_attributes=True)

    def get_user_by_id(self, user_id: int) -> Optional[UserProfile]:
        if not _storable_id(user_id):
            return None
        with self._sessionmaker() as session:
            row = session.execute(
                select(User.id, User.username, User.created_at, User.last_login).where(
                    User.id == user_id, User.is_active.is_(True)
                )
            ).first()
        if row is None:
            return None
        return UserProfile.model_validate(dict(row._mapping))

    def update_last_login(self, user_id: int) -> None:
        if not _storable_id(user_id):
            return
        with self._sessionmaker() as session, session.begin():
            session.execute(
                update(User)
                .where(
                    User.id == user_id,
                    or_(User.last_login.is_(None), User.last_login < func.now()),
                )
                .values(last_login=func.now())
                .execution_options(synchronize_session=False)
            )

    def deactivate_user(self, user_id: int) -> bool:
        if not _storable_id(user_id):
            return False
        with self._sessionmaker() as session, session.begin():
            result = session.execute(
                update(User)
                .where(User.id == user_id, User.is_active.is_(True))
                .values(is_active=False)
                .execution_options(synchronize_session=False)
            )
            changed = result.rowcount > 0
        if changed:
            logger.info("Deactivated user id=%s", user_id)
        return changed

    def dispose(self) -> None:
        self.engine.dispose()

from sqlalchemy import Boolean, DateTime, Index, Integer, String, text, true
from sqlalchemy.orm import mapped_column
from .base import Base, CreatedAtMixin


class User(Base, CreatedAtMixin):
    __tablename__ = "users"
    # Usernames are only unique among active rows; retired rows keep theirs.
    __table_args__ = (
        Index(
            "ux_users_active_username",
            "username",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
        {"sqlite_autoincrement": True},
    )

    id = mapped_column(Integer, primary_key=True, autoincrement=True)
    username = mapped_column(String(64), nullable=False, index=True)
    password_hash = mapped_column(String(256), nullable=False)
    last_login = mapped_column(DateTime(timezone=True), nullable=True)
    is_active = mapped_column(Boolean, nullable=False, default=True, server_default=true())

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, PositiveInt, field_validator


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive values from CURRENT_TIMESTAMP, which is UTC.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class CreatedUser(BaseModel):
    id: PositiveInt
    username: str


class UserProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: PositiveInt
    username: str
    created_at: datetime
    last_login: datetime | None = None

    @field_validator("created_at", "last_login")
    @classmethod
    def _normalize_tz(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


class UserRecord(UserProfile):
    password_hash: str
    is_active: bool = True

    def to_profile(self) -> UserProfile:
        return UserProfile(
            id=self.id,
            username=self.username,
            created_at=self.created_at,
            last_login=self.last_login,
        )

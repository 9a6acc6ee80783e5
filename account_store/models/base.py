from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, mapped_column


class Base(DeclarativeBase):
    pass


class CreatedAtMixin:
    created_at = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

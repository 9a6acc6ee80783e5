from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from .models.base import Base


def create_db_engine(database_url: str) -> Engine:
    url = make_url(database_url)
    connect_args = {}
    kwargs = {"pool_pre_ping": True}
    if url.get_backend_name() == "sqlite":
        connect_args = {"check_same_thread": False}
        if url.database and url.database != ":memory:":
            Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
    kwargs["connect_args"] = connect_args
    return create_engine(url, **kwargs)


def create_sessionmaker(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)

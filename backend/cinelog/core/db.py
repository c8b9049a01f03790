from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from cinelog import models  # noqa: F401  (registers the table models)
from cinelog.core.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str, **kwargs: Any) -> Engine:
    """
    Create an engine for the given database URL.

    SQLite does not enforce foreign keys unless asked to on every connection,
    so a connect listener takes care of that for sqlite URLs.
    """
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(url, connect_args=connect_args, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(url, pool_pre_ping=True, **kwargs)


engine = create_db_engine(settings.SQLALCHEMY_DATABASE_URI)


def init_db(db_engine: Engine = engine) -> None:
    SQLModel.metadata.create_all(db_engine)

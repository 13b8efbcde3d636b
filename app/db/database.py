# /app/db/database.py

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the SQLAlchemy engine and session factory for one database URL.

    An instance is created by the application lifespan at startup, stored on
    `app.state.db`, and disposed at shutdown. Request handlers receive sessions
    through the `get_db` dependency below.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        # The 'check_same_thread' argument is only needed for SQLite.
        engine_args = {"connect_args": {"check_same_thread": False}} if url.startswith("sqlite") else {"pool_pre_ping": True}
        self.engine: Engine = create_engine(url, echo=echo, **engine_args)
        if self.dialect == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine)

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    def create_all(self) -> None:
        """Creates any missing tables for the registered models."""
        # Imported here so that every model is registered on Base.metadata.
        from .base import Base

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database ready (%s backend)", self.dialect)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Dependency to get a DB session. This will be used in our API routers.
def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()

"""
Database engine and session factory.

Nothing here is created at import time: the process builds one engine and one
sessionmaker at startup and passes them down (see slotbook.main.lifespan).
"""
import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, sessionmaker

from slotbook.core.errors import StorageUnavailable

logger = logging.getLogger(__name__)

# Seconds a SQLite writer waits on the database lock before failing.
SQLITE_BUSY_TIMEOUT_SECONDS = 30


def create_db_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        # check_same_thread=False: sessions are opened from FastAPI worker threads and the scheduler
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT_SECONDS},
        )

        @event.listens_for(engine, "connect")
        def enable_sqlite_fk(dbapi_connection, _):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine
    return create_engine(
        database_url,
        pool_size=8,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_timeout=30,
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@contextmanager
def storage_transaction(session_factory: sessionmaker) -> Iterator[Session]:
    """
    One transaction: commit on success, roll back on any exception.
    Connectivity failures and pool timeouts are re-raised as StorageUnavailable.
    """
    try:
        with session_factory.begin() as db:
            yield db
    except (OperationalError, InterfaceError, PoolTimeoutError) as e:
        logger.warning("Storage operation failed: %s", type(e).__name__)
        raise StorageUnavailable("Storage unavailable") from e

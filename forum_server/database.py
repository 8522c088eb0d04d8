# forum_server/database.py

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from forum_server.core.errors import StoreUnavailable
from forum_server.models import Base


logger = logging.getLogger(__name__)


def create_store_engine(url: str, timeout: int = 5) -> Engine:
    """
    Build the engine for the backing store. ``timeout`` bounds how long a
    caller waits on the store (SQLite busy timeout, or the pool checkout
    timeout for server databases).

    SQLite transactions start with BEGIN IMMEDIATE, so the write lock is held
    from the first read and a parent's ``child_ids`` cannot be read stale.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, pool_timeout=timeout, pool_pre_ping=True)

    connect_args = {"check_same_thread": False, "timeout": timeout}
    if url in ("sqlite://", "sqlite:///:memory:"):
        engine = create_engine(url, connect_args=connect_args, poolclass=StaticPool)
    else:
        engine = create_engine(url, connect_args=connect_args)

    @event.listens_for(engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine
    )


def init_db(engine: Engine):
    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_errors():
    """Surface driver failures as StoreUnavailable."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Store operation failed")
        raise StoreUnavailable() from exc


@contextmanager
def unit_of_work(db: Session):
    """
    Commit everything done inside the block, or roll all of it back.
    IntegrityError is re-raised untouched so callers can map constraint
    violations to their own error kinds.
    """
    try:
        yield db
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Store transaction failed")
        raise StoreUnavailable() from exc
    except Exception:
        db.rollback()
        raise

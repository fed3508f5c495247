import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .errors import InvalidConfiguration, StoreIOError


log = logging.getLogger(__name__)

Base = declarative_base()


def _is_memory_sqlite(url) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def make_engine(database_url: str):
    try:
        url = make_url(database_url)
    except ArgumentError as e:
        raise InvalidConfiguration(f"invalid database url {database_url!r}: {e}") from e

    kwargs = {}
    if url.get_backend_name() == "sqlite":
        # The same connection is used from FastAPI's worker threads
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(url):
            kwargs["poolclass"] = StaticPool
    try:
        return create_engine(url, **kwargs)
    except (ArgumentError, ImportError) as e:  # unknown dialect or missing driver
        raise InvalidConfiguration(f"cannot use database url {database_url!r}: {e}") from e


def make_sessionmaker(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine):
    """Create the backing file's directory (SQLite only) and the schema."""
    # models must be imported so the table is registered on Base
    from . import models  # noqa: F401

    url = engine.url
    if url.get_backend_name() == "sqlite" and not _is_memory_sqlite(url):
        parent = Path(url.database).expanduser().resolve().parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreIOError(f"cannot create database directory {parent}: {e}") from e
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        raise StoreIOError(f"cannot open database {url.render_as_string(hide_password=True)}: {e}") from e
    log.debug("database ready at %s", url.render_as_string(hide_password=True))

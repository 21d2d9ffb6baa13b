from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Base class for all database models
Base = declarative_base()

_IN_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record) -> None:
    """SQLite ignores FOREIGN KEY clauses unless enabled per connection."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """
    Create the database engine for the given URL.

    SQLite needs check_same_thread=False because request handlers run in a
    thread pool. An in-memory SQLite database only lives as long as its
    connection, so it is pinned to a single shared connection with StaticPool.
    """
    kwargs: dict = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in _IN_MEMORY_URLS:
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)
    if database_url.startswith("sqlite"):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    # autocommit=False: changes require an explicit commit
    # expire_on_commit=False: records stay readable after the repository commits
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create tables for every model registered on Base"""
    # Models must be imported so their tables are registered on Base.metadata
    from coursehub.models import course, user  # noqa: F401

    Base.metadata.create_all(bind=engine)

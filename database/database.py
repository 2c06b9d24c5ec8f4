import os
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///thesis_match.db")


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (url.endswith(":memory:") or url in ("sqlite://", "sqlite:///"))


def _begin_immediate(engine: Engine) -> None:
    """
    Take the SQLite write lock when a transaction starts.

    A deferred transaction that reads and then writes can fail with
    "database is locked" without waiting when another connection commits.
    """
    @event.listens_for(engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str = DATABASE_URL, echo: bool = False) -> Engine:
    """
    Create an engine for ``url``.

    In-memory SQLite gets a single shared connection so every session sees
    the same database. File SQLite serializes writers with a busy timeout.
    """
    if _is_memory_sqlite(url):
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        engine = create_engine(url, echo=echo, connect_args={"timeout": 30})
        _begin_immediate(engine)
        return engine
    return create_engine(url, echo=echo, pool_pre_ping=True, pool_size=10, max_overflow=20)


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = build_engine(DATABASE_URL)
SessionLocal = build_session_factory(engine)

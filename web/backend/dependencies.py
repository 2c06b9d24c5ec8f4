#!/usr/bin/env python3
"""
FastAPI dependencies: database sessions and the shared assignment coordinator.
"""

from functools import lru_cache
from typing import Generator, Optional

from sqlalchemy.orm import Session

from core.assignment import AssignmentCoordinator, build_lock_strategy
from database.database import build_engine, build_session_factory
from .config import get_config


class DatabaseManager:
    """Engine and session factory for the configured database."""

    def __init__(self, url: Optional[str] = None, echo: bool = False):
        if url is None:
            config = get_config()
            url, echo = config.database.url, config.database.echo
        self.engine = build_engine(url, echo=echo)
        self.SessionLocal = build_session_factory(self.engine)

    def session(self) -> Generator[Session, None, None]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()


@lru_cache()
def get_db_manager() -> DatabaseManager:
    return DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """
    Request-scoped session for read endpoints and simple CRUD.

    Services commit explicitly; anything left uncommitted is discarded when
    the session closes.
    """
    yield from get_db_manager().session()


@lru_cache()
def get_coordinator() -> AssignmentCoordinator:
    """
    Process-wide assignment coordinator.

    A single instance is required so every request shares the same locks.
    """
    config = get_config()
    return AssignmentCoordinator(
        session_factory=get_db_manager().SessionLocal,
        locks=build_lock_strategy(config.assignment.lock_strategy),
    )


def get_db_engine():
    return get_db_manager().engine
